"""
Music Radio - a bounded track collection with a recommendation graph.

Public API re-exported for convenience; see music_radio.domain for details.
"""

from music_radio.domain.exceptions import (
    CapacityExceededError,
    MalformedDescriptorError,
    RadioError,
    RadioFormatError,
    RadioIOError,
    UnknownIdError,
)
from music_radio.domain.library import ListenState, Track
from music_radio.domain.radio import (
    DEFAULT_CAPACITY,
    Radio,
    dumps_radio,
    load_radio,
    loads_radio,
    read_radio,
    write_radio,
)

__version__ = "0.1.0"

__all__ = [
    "Track",
    "ListenState",
    "Radio",
    "DEFAULT_CAPACITY",
    "read_radio",
    "load_radio",
    "loads_radio",
    "write_radio",
    "dumps_radio",
    "RadioError",
    "CapacityExceededError",
    "RadioFormatError",
    "MalformedDescriptorError",
    "UnknownIdError",
    "RadioIOError",
]
