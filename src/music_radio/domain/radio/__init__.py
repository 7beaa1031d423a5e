"""
Radio domain module.

Provides the bounded track store with its directed recommendation graph, and
the bulk text format used to load and dump it.
"""

from .codec import dumps_radio, load_radio, loads_radio, read_radio, write_radio
from .matrix import RelationMatrix
from .store import DEFAULT_CAPACITY, Radio
from .table import TrackTable

__all__ = [
    # Store
    "Radio",
    "DEFAULT_CAPACITY",
    "TrackTable",
    "RelationMatrix",
    # Text format
    "read_radio",
    "load_radio",
    "loads_radio",
    "write_radio",
    "dumps_radio",
]
