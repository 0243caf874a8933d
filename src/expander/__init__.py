"""MCP23017 port expander LED shift sequencer."""

from expander.config import SequencerConfig
from expander.errors import DeviceAddressError, DeviceOpenError, ExpanderError, WriteError
from expander.sequencer import ShiftSequencer

__all__ = [
    "DeviceAddressError",
    "DeviceOpenError",
    "ExpanderError",
    "SequencerConfig",
    "ShiftSequencer",
    "WriteError",
]
