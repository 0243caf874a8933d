"""I2C channel to a single peripheral via the Linux i2c-dev interface.

smbus2 opens the bus node and owns the file descriptor. The register
transfers themselves are plain write(2) calls on that descriptor so the
byte count the kernel reports can be checked.
"""

import fcntl
import logging
import os
from dataclasses import dataclass

from smbus2 import SMBus

from expander.errors import DeviceAddressError, DeviceOpenError, WriteError

logger = logging.getLogger(__name__)

# ioctl requests from linux/i2c-dev.h
I2C_SLAVE = 0x0703
I2C_SLAVE_FORCE = 0x0706  # Claim even if a kernel driver is bound


@dataclass(frozen=True)
class Transfer:
    """One register write: address byte followed by a payload byte."""

    register: int
    value: int

    def __bytes__(self) -> bytes:
        return bytes([self.register & 0xFF, self.value & 0xFF])

    def __len__(self) -> int:
        return 2

    def __str__(self) -> str:
        return f"write 0x{self.value:02X} to register 0x{self.register:02X}"


class I2CChannel:
    """Owns an open i2c-dev node addressed to one peripheral."""

    def __init__(self, device: str):
        """
        Args:
            device: Bus device node, e.g. '/dev/i2c-1'
        """
        self.device = device
        self.address = None
        self._bus = None

    @property
    def is_open(self) -> bool:
        return self._bus is not None

    def open(self) -> None:
        """Open the bus node for read/write."""
        try:
            self._bus = SMBus(self.device)
        except OSError as e:
            raise DeviceOpenError(f"{self.device}: {e.strerror or e}") from e
        logger.info("opened %s", self.device)

    def claim(self, address: int, force: bool = False) -> None:
        """
        Address all further writes to one peripheral.

        Args:
            address: 7-bit peripheral address
            force: Claim even if a kernel driver is bound to the address
        """
        request = I2C_SLAVE_FORCE if force else I2C_SLAVE
        try:
            fcntl.ioctl(self._bus.fd, request, address)
        except OSError as e:
            raise DeviceAddressError(
                f"0x{address:02X} on {self.device}: {e.strerror or e}"
            ) from e
        self.address = address
        logger.info("claimed address 0x%02X", address)

    def write(self, transfer: Transfer) -> int:
        """Send one transfer; returns the number of bytes the kernel accepted."""
        try:
            written = os.write(self._bus.fd, bytes(transfer))
        except OSError as e:
            raise WriteError(transfer, 0, f"{transfer}: {e.strerror or e}") from e
        logger.debug("%s (%d bytes)", transfer, written)
        return written

    def close(self) -> None:
        """Release the bus node. Safe to call more than once."""
        if self._bus is None:
            return
        try:
            self._bus.close()
        finally:
            self._bus = None
            self.address = None
        logger.info("closed %s", self.device)

    def __enter__(self) -> "I2CChannel":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
