"""MCP23017 register map (IOCON.BANK = 0, the power-on layout).

Names follow the datasheet. Only IODIRx and GPIOx are written by the
sequencer; the rest are listed so the map is complete.
"""

from typing import NamedTuple

IODIRA = 0x00  # I/O direction (1 = input)
IODIRB = 0x01
IPOLA = 0x02  # Input polarity
IPOLB = 0x03
GPINTENA = 0x04  # Interrupt-on-change enable
GPINTENB = 0x05
DEFVALA = 0x06  # Interrupt compare value
DEFVALB = 0x07
INTCONA = 0x08  # Interrupt control
INTCONB = 0x09
IOCON = 0x0A  # Configuration (also mirrored at 0x0B)
GPPUA = 0x0C  # Pull-up enable
GPPUB = 0x0D
INTFA = 0x0E  # Interrupt flags
INTFB = 0x0F
INTCAPA = 0x10  # Interrupt capture
INTCAPB = 0x11
GPIOA = 0x12  # Port value
GPIOB = 0x13
OLATA = 0x14  # Output latch
OLATB = 0x15


class Port(NamedTuple):
    """Direction and data register pair for one 8-bit port."""

    direction: int
    data: int


PORTS = {
    "A": Port(direction=IODIRA, data=GPIOA),
    "B": Port(direction=IODIRB, data=GPIOB),
}
