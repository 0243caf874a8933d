"""Shift a single lit bit back and forth across one expander port.

Note: do not change this to light more than two or three outputs at once
when driving LEDs straight from the MCP23017. The total output current
would exceed the chip's rating; use a driver or transistors instead.
"""

import enum
import logging
import sys
import time
from typing import Callable, Optional, TextIO

from expander.channel import I2CChannel, Transfer
from expander.config import (
    DIRECTION_INPUTS,
    DIRECTION_OUTPUTS,
    OUTPUTS_CLEAR,
    STEPS_PER_SWEEP,
    SequencerConfig,
)
from expander.errors import WriteError
from expander.pattern import render_byte, rotate_left, rotate_right

logger = logging.getLogger(__name__)


class State(enum.Enum):
    UNOPENED = "unopened"
    OPENED = "opened"
    ADDRESSED = "addressed"
    CONFIGURED = "configured"
    SWEEPING = "sweeping"
    CLEARED = "cleared"
    RESET = "reset"
    CLOSED = "closed"
    FAILED = "failed"


class Direction(enum.Enum):
    LEFT = "left"
    RIGHT = "right"


ROTATE = {
    Direction.LEFT: rotate_left,
    Direction.RIGHT: rotate_right,
}


class ShiftSequencer:
    """Runs the sweep sequence on one port of an MCP23017."""

    def __init__(
        self,
        config: Optional[SequencerConfig] = None,
        channel=None,
        sleep: Callable[[float], None] = time.sleep,
        output: Optional[TextIO] = None,
    ):
        """
        Args:
            config: Run settings (defaults match the bench wiring)
            channel: Object with open/claim/write/close; an I2CChannel on
                config.device if None
            sleep: Delay function, replaced in tests
            output: Stream for the rendered pattern (stdout if None)
        """
        self.config = config or SequencerConfig()
        self.channel = channel or I2CChannel(self.config.device)
        self.sleep = sleep
        self.output = output
        self.state = State.UNOPENED
        self.pattern = self.config.pattern
        # (outer loop, step, direction) while sweeping
        self.position = None

    def run(self) -> None:
        """
        Run the whole sequence and leave the port as inputs.

        Raises:
            ExpanderError: On any open, address or write failure. The
                channel is closed before the error propagates.
        """
        try:
            self._acquire()
            self._configure()
            self._sweep()
            self._teardown()
        except BaseException:
            self.state = State.FAILED
            raise
        finally:
            self.channel.close()
        self.state = State.CLOSED
        logger.info("sequence complete")

    def _acquire(self) -> None:
        self.channel.open()
        self.state = State.OPENED
        self.channel.claim(self.config.address, force=self.config.force)
        self.state = State.ADDRESSED

    def _configure(self) -> None:
        self._write(Transfer(self.config.direction_register, DIRECTION_OUTPUTS))
        self.state = State.CONFIGURED

    def _sweep(self) -> None:
        self.state = State.SWEEPING
        self.pattern = self.config.pattern
        for loop in range(self.config.limit):
            for direction in (Direction.LEFT, Direction.RIGHT):
                rotate = ROTATE[direction]
                for step in range(STEPS_PER_SWEEP):
                    self.position = (loop, step, direction)
                    self._show(self.pattern)
                    self.pattern = rotate(self.pattern, self.config.shift)
        # Leave the last position lit for one more delay
        self.position = None
        self._show(self.pattern)

    def _teardown(self) -> None:
        self._write(Transfer(self.config.data_register, OUTPUTS_CLEAR))
        self.state = State.CLEARED
        self._write(Transfer(self.config.direction_register, DIRECTION_INPUTS))
        self.state = State.RESET
        logger.info("port %s reset to inputs", self.config.port)

    def _show(self, pattern: int) -> None:
        self._write(Transfer(self.config.data_register, pattern))
        print(render_byte(pattern), file=self.output or sys.stdout)
        self.sleep(self.config.delay)

    def _write(self, transfer: Transfer) -> None:
        written = self.channel.write(transfer)
        if written != len(transfer):
            raise WriteError(transfer, written)
