"""
Radio store: a bounded set of tracks plus directed recommendations between them.

A Radio owns its tracks. Relations are directed "recommend" links between two
stored tracks, addressed by track id. Inserting an id that is already stored
and adding a relation that already exists are both successful no-ops.

A Radio is not thread-safe. Callers sharing one across threads must guard it
with their own lock.
"""

from typing import TYPE_CHECKING, Iterator, List, Optional, TextIO

from loguru import logger

from music_radio.domain.exceptions import (
    CapacityExceededError,
    RadioIOError,
    UnknownIdError,
)
from music_radio.domain.library.models import Track

from .matrix import RelationMatrix
from .table import TrackTable

if TYPE_CHECKING:
    from music_radio.core.config import Config

DEFAULT_CAPACITY = 50


class Radio:
    """Fixed-capacity track collection with a recommendation graph."""

    def __init__(
        self, capacity: int = DEFAULT_CAPACITY, quoted_values: bool = True
    ):
        self.quoted_values = quoted_values
        self._table = TrackTable(capacity)
        self._matrix = RelationMatrix(capacity)
        self._num_relations = 0

    @classmethod
    def from_config(cls, config: "Config") -> "Radio":
        """Create an empty radio from the [radio] config section."""
        return cls(
            capacity=config.radio.capacity,
            quoted_values=config.radio.quoted_values,
        )

    @property
    def capacity(self) -> int:
        return self._table.capacity

    @property
    def track_count(self) -> int:
        return len(self._table)

    @property
    def relation_count(self) -> int:
        return self._num_relations

    @property
    def is_full(self) -> bool:
        return self._table.is_full

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, track_id: object) -> bool:
        return (
            isinstance(track_id, int)
            and not isinstance(track_id, bool)
            and self.contains(track_id)
        )

    # Mutations

    def add_track(self, track: Track) -> bool:
        """
        Store a track unless its id is already present.

        Args:
            track: Track to store

        Returns:
            True if stored, False if the id was already present (nothing changes)

        Raises:
            CapacityExceededError: If the radio is full and the id is new
        """
        try:
            slot, inserted = self._table.insert(track)
        except CapacityExceededError:
            logger.warning(f"Radio full ({self.capacity}), rejected track {track.id}")
            raise

        if inserted:
            logger.debug(f"Added track {track.id} at slot {slot}")
        else:
            logger.debug(f"Track {track.id} already present, skipping")
        return inserted

    def new_track(self, descriptor: str, quoted: Optional[bool] = None) -> bool:
        """
        Parse a descriptor and store the resulting track.

        A duplicate id is not an error: the stored track is kept unchanged.

        Args:
            descriptor: Track descriptor (key:value tokens)
            quoted: Whether double-quoted values are dequoted
                (default: the radio's quoted_values)

        Returns:
            True if stored, False if the id was already present

        Raises:
            MalformedDescriptorError: If the descriptor is invalid
            CapacityExceededError: If the radio is full and the id is new
        """
        if quoted is None:
            quoted = self.quoted_values
        return self.add_track(Track.from_descriptor(descriptor, quoted=quoted))

    def new_relation(self, orig: int, dest: int) -> bool:
        """
        Add a directed relation orig -> dest.

        Returns:
            True if the relation is new, False if it already existed

        Raises:
            UnknownIdError: If either id is not in the radio
        """
        orig_slot = self._table.index_of(orig)
        if orig_slot is None:
            raise UnknownIdError(orig)
        dest_slot = self._table.index_of(dest)
        if dest_slot is None:
            raise UnknownIdError(dest)

        added = self._matrix.add_edge(orig_slot, dest_slot)
        if added:
            self._num_relations += 1
            logger.debug(f"Added relation {orig} -> {dest}")
        return added

    # Queries

    def contains(self, track_id: int) -> bool:
        return self._table.index_of(track_id) is not None

    def get_track(self, track_id: int) -> Optional[Track]:
        slot = self._table.index_of(track_id)
        if slot is None:
            return None
        return self._table.track_at(slot)

    def tracks(self) -> Iterator[Track]:
        """Stored tracks in insertion order."""
        return iter(self._table)

    def relation_exists(self, orig: int, dest: int) -> bool:
        """True if orig -> dest is stored. Unknown ids give False."""
        orig_slot = self._table.index_of(orig)
        dest_slot = self._table.index_of(dest)
        if orig_slot is None or dest_slot is None:
            return False
        return self._matrix.has_edge(orig_slot, dest_slot)

    def out_degree(self, track_id: int) -> int:
        """Number of relations starting at track_id, or -1 if the id is unknown."""
        slot = self._table.index_of(track_id)
        if slot is None:
            return -1
        return self._matrix.out_degree(slot, len(self._table))

    def successor_ids(self, track_id: int) -> Optional[List[int]]:
        """
        Ids the track recommends, in the order those tracks were inserted.

        Returns:
            List of destination ids (empty when there are none), or None if
            track_id is not in the radio
        """
        slot = self._table.index_of(track_id)
        if slot is None:
            return None
        return [
            self._table.track_at(dest).id
            for dest in self._matrix.successors(slot, len(self._table))
        ]

    def relations(self) -> Iterator[tuple[int, int]]:
        """All (orig, dest) id pairs, origins and destinations in insertion order."""
        occupied = len(self._table)
        for orig in range(occupied):
            orig_id = self._table.track_at(orig).id
            for dest in self._matrix.successors(orig, occupied):
                yield orig_id, self._table.track_at(dest).id

    # Output

    def print(self, sink: TextIO) -> int:
        """
        Write one line per track: the track, ':' and each recommended track.

        Format: `[id, title, artist, duration, state]: [succ1] [succ2]`

        Args:
            sink: Writable text stream

        Returns:
            Total number of characters written

        Raises:
            RadioIOError: If writing to sink fails; output stops at that point
        """
        occupied = len(self._table)
        total = 0
        try:
            for slot in range(occupied):
                total += self._table.track_at(slot).plain_print(sink)
                total += _write(sink, ":")
                for dest in self._matrix.successors(slot, occupied):
                    total += _write(sink, " ")
                    total += self._table.track_at(dest).plain_print(sink)
                total += _write(sink, "\n")
        except OSError as e:
            logger.warning(f"Radio print failed after {total} characters: {e}")
            raise RadioIOError(f"Failed to print radio: {e}") from e
        return total


def _write(sink: TextIO, text: str) -> int:
    sink.write(text)
    return len(text)
