"""
Fixed-capacity, insertion-ordered track storage.

Tracks live in slots numbered in insertion order. Slots are an internal
detail of the radio; callers address tracks by id.
"""

from typing import Dict, Iterator, List, Optional

from music_radio.domain.exceptions import CapacityExceededError
from music_radio.domain.library.models import Track


class TrackTable:
    """Slot-indexed tracks with a unique id -> slot index."""

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"Capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._tracks: List[Track] = []
        self._slots: Dict[int, int] = {}

    def insert(self, track: Track) -> tuple[int, bool]:
        """
        Append a track at the next free slot unless its id is already stored.

        An existing id is left untouched: no field update, no new slot.

        Args:
            track: Track to store

        Returns:
            (slot, inserted) where inserted is False for an already present id

        Raises:
            CapacityExceededError: If the table is full and the id is new
        """
        slot = self._slots.get(track.id)
        if slot is not None:
            return slot, False

        if self.is_full:
            raise CapacityExceededError(self.capacity)

        slot = len(self._tracks)
        self._tracks.append(track)
        self._slots[track.id] = slot
        return slot, True

    def index_of(self, track_id: int) -> Optional[int]:
        """Slot of the track with this id, or None if absent or negative."""
        if track_id < 0:
            return None
        return self._slots.get(track_id)

    def track_at(self, slot: int) -> Track:
        return self._tracks[slot]

    @property
    def is_full(self) -> bool:
        return len(self._tracks) >= self.capacity

    def __len__(self) -> int:
        return len(self._tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(self._tracks)
