"""Sequencer defaults and runtime configuration.

The module-level constants match the wiring on the bench: an MCP23017 at
0x20 on the Pi's I2C-1 header, LED on port A. Override them per run with
command-line flags (see led_shift.py) rather than editing this file.
"""

import math
from dataclasses import dataclass

from expander.registers import PORTS

# =============================================================================
# Bus and Device
# =============================================================================
DEVICE = "/dev/i2c-1"  # I2C bus device node
ADDRESS = 0x20  # A0-A2 tied low
PORT = "A"  # Port driving the LED (A or B)

# Valid 7-bit addresses (0x00-0x02 and 0x78-0x7F are reserved)
ADDRESS_MIN = 0x03
ADDRESS_MAX = 0x77

# =============================================================================
# Sequence
# =============================================================================
DELAY = 0.2  # Seconds between writes (slow enough to see)
LIMIT = 2  # Number of left+right sweep cycles
PATTERN = 0x01  # Initial bit pattern - keep to one lit LED
SHIFT = 1  # Bits to rotate per step

# Steps per sweep. One less than the register width so the end positions
# are not shown twice when the direction flips.
STEPS_PER_SWEEP = 7

# =============================================================================
# Register Values
# =============================================================================
DIRECTION_OUTPUTS = 0x00  # All pins outputs
DIRECTION_INPUTS = 0xFF  # All pins inputs (power-on default)
OUTPUTS_CLEAR = 0x00


@dataclass(frozen=True)
class SequencerConfig:
    """Runtime settings for one run of the shift sequencer."""

    device: str = DEVICE
    address: int = ADDRESS
    port: str = PORT
    delay: float = DELAY
    limit: int = LIMIT
    pattern: int = PATTERN
    shift: int = SHIFT
    force: bool = False

    def __post_init__(self):
        if not ADDRESS_MIN <= self.address <= ADDRESS_MAX:
            raise ValueError(
                f"address 0x{self.address:02X} outside 0x{ADDRESS_MIN:02X}-0x{ADDRESS_MAX:02X}"
            )
        if self.port not in PORTS:
            raise ValueError(f"port must be one of {', '.join(PORTS)}, not {self.port!r}")
        if not 0 <= self.pattern <= 0xFF:
            raise ValueError(f"pattern {self.pattern} does not fit in a byte")
        # More than a couple of LEDs at once exceeds the chip's current rating
        if bin(self.pattern).count("1") != 1:
            raise ValueError(f"pattern 0x{self.pattern:02X} must have exactly one bit set")
        if not 1 <= self.shift <= 7:
            raise ValueError(f"shift must be 1-7, not {self.shift}")
        if not (math.isfinite(self.delay) and self.delay >= 0):
            raise ValueError(f"delay must be a finite number >= 0, not {self.delay}")
        if self.limit < 0:
            raise ValueError("limit must be >= 0")

    @property
    def direction_register(self) -> int:
        """IODIRx for the active port."""
        return PORTS[self.port].direction

    @property
    def data_register(self) -> int:
        """GPIOx for the active port."""
        return PORTS[self.port].data
