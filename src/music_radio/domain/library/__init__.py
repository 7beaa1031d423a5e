"""
Music library domain module.

Provides the Track value object and its descriptor text form.
"""

from .descriptor import (
    DESCRIPTOR_KEYS,
    format_descriptor,
    parse_descriptor,
    split_descriptor,
)
from .models import MAX_DURATION, STR_LENGTH, ListenState, Track

__all__ = [
    # Models
    "Track",
    "ListenState",
    "STR_LENGTH",
    "MAX_DURATION",
    # Descriptors
    "DESCRIPTOR_KEYS",
    "split_descriptor",
    "parse_descriptor",
    "format_descriptor",
]
