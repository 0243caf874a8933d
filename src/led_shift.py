#!/usr/bin/env python3
"""Shift a single lit LED left and right on an MCP23017 port.

Wire an LED (with a current limiting resistor) to any pin of the chosen
port, then run on the Pi:
    python3 led_shift.py
    python3 led_shift.py --port B --delay 0.1 --limit 5

Each write prints the port value as two nibbles. Exits 0 when the sequence
completes and the port is back to inputs, 1 on any device error.
"""

import argparse
import logging
import sys

from expander.config import (
    ADDRESS,
    DELAY,
    DEVICE,
    LIMIT,
    PATTERN,
    PORT,
    SHIFT,
    SequencerConfig,
)
from expander.errors import EXIT_SUCCESS, ExpanderError
from expander.registers import PORTS
from expander.sequencer import ShiftSequencer

logger = logging.getLogger("led_shift")


def int_auto(text):
    """Parse decimal or 0x/0b prefixed integers."""
    try:
        return int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}")


def build_parser():
    parser = argparse.ArgumentParser(description="Shift an LED across an MCP23017 port")
    parser.add_argument("--device", default=DEVICE, help=f"I2C bus node (default {DEVICE})")
    parser.add_argument(
        "--address", type=int_auto, default=ADDRESS, help=f"chip address (default 0x{ADDRESS:02X})"
    )
    parser.add_argument("--port", choices=sorted(PORTS), default=PORT)
    parser.add_argument("--delay", type=float, default=DELAY, help="seconds between steps")
    parser.add_argument("--limit", type=int_auto, default=LIMIT, help="number of sweep cycles")
    parser.add_argument(
        "--pattern", type=int_auto, default=PATTERN, help="initial pattern (one bit set)"
    )
    parser.add_argument("--shift", type=int_auto, default=SHIFT, help="bits to rotate per step")
    parser.add_argument(
        "--force", action="store_true", help="claim the address even if a driver owns it"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log every transfer")
    return parser


def configure_logging(verbose):
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(style="{", fmt="{levelname[0]:s}: {name:s}: {message:s}"))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return handler


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = SequencerConfig(
            device=args.device,
            address=args.address,
            port=args.port,
            delay=args.delay,
            limit=args.limit,
            pattern=args.pattern,
            shift=args.shift,
            force=args.force,
        )
    except ValueError as e:
        parser.error(str(e))

    handler = configure_logging(args.verbose)
    try:
        ShiftSequencer(config).run()
    except ExpanderError as e:
        logger.error("%s", e)
        print(e.message)
        return e.exit_code
    finally:
        logging.getLogger().removeHandler(handler)
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
