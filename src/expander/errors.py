"""Exceptions raised while driving the port expander.

Every failure is fatal to a run. The CLI prints ``message`` and exits with
EXIT_FAILURE; the underlying OSError, if any, is chained as ``__cause__``.
"""

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class ExpanderError(Exception):
    """Base class for port expander failures."""

    message = "Port expander error"
    exit_code = EXIT_FAILURE

    def __init__(self, detail: str = ""):
        super().__init__(f"{self.message}: {detail}" if detail else self.message)
        self.detail = detail


class DeviceOpenError(ExpanderError):
    """Bus device node could not be opened for read/write."""

    message = "Failed to open device"


class DeviceAddressError(ExpanderError):
    """Peripheral address could not be claimed on the open bus."""

    message = "Unable to access device"


class WriteError(ExpanderError):
    """A register transfer wrote fewer bytes than requested."""

    message = "Error writing data"

    def __init__(self, transfer, written: int, detail: str = ""):
        if not detail:
            detail = f"{transfer} wrote {written} of {len(transfer)} bytes"
        super().__init__(detail)
        self.transfer = transfer
        self.written = written
