"""
Music library domain models.

Contains the Track value object stored by a radio and its listen state.
"""

from dataclasses import dataclass, replace
from enum import IntEnum
from functools import total_ordering
from typing import TextIO

from music_radio.domain.exceptions import MalformedDescriptorError

from .descriptor import format_descriptor, parse_descriptor, parse_int

STR_LENGTH = 64  # title/artist must be strictly shorter than this
MAX_DURATION = 65535  # seconds, unsigned short


class ListenState(IntEnum):
    """Whether a track has been listened to."""

    NOT_LISTENED = 0
    LISTENED = 1

    @classmethod
    def parse(cls, value: str) -> "ListenState":
        """Parse a state token: the enum name or its numeric code.

        Raises:
            MalformedDescriptorError: If the token is not a valid state
        """
        for state in cls:
            if value == state.name or value == str(state.value):
                return state
        raise MalformedDescriptorError(f"Invalid state: {value!r}")


@total_ordering
@dataclass(frozen=True, eq=False)
class Track:
    """Represents a music track in a radio.

    Tracks are identified by id. Fields are validated on construction, so a
    Track that exists is always storable. Changes produce a new Track.
    """

    id: int = 0
    title: str = ""
    artist: str = ""
    duration: int = 0  # in seconds
    state: ListenState = ListenState.NOT_LISTENED

    def __post_init__(self) -> None:
        if not _is_int(self.id) or self.id < 0:
            raise MalformedDescriptorError(f"Invalid id: {self.id!r}")
        _check_text("title", self.title)
        _check_text("artist", self.artist)
        if not _is_int(self.duration) or not 0 <= self.duration <= MAX_DURATION:
            raise MalformedDescriptorError(f"Invalid duration: {self.duration!r}")
        try:
            state = ListenState(self.state)
        except ValueError:
            raise MalformedDescriptorError(f"Invalid state: {self.state!r}") from None
        object.__setattr__(self, "state", state)

    @classmethod
    def from_descriptor(cls, descriptor: str, quoted: bool = True) -> "Track":
        """
        Build a Track from a `key:value` descriptor string.

        Keys not present keep their defaults, so an empty descriptor gives
        track 0 with empty fields. A repeated key overwrites the earlier one.

        Args:
            descriptor: Whitespace separated key:value pairs
            quoted: Whether double-quoted values are dequoted

        Returns:
            The parsed Track

        Raises:
            MalformedDescriptorError: If any token or field is invalid
        """
        fields = parse_descriptor(descriptor, quoted=quoted)
        kwargs = {}
        for key, raw in fields.items():
            if key in ("id", "duration"):
                kwargs[key] = parse_int(key, raw)
            elif key == "state":
                kwargs[key] = ListenState.parse(raw)
            else:
                kwargs[key] = raw
        return cls(**kwargs)

    def sort_key(self) -> tuple[int, str, str]:
        return (self.id, self.title, self.artist)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Track):
            return NotImplemented
        return self.sort_key() == other.sort_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Track):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self) -> int:
        return hash(self.sort_key())

    # Track is frozen: setters return a changed copy

    def with_title(self, title: str) -> "Track":
        return replace(self, title=title)

    def with_artist(self, artist: str) -> "Track":
        return replace(self, artist=artist)

    def with_duration(self, duration: int) -> "Track":
        return replace(self, duration=duration)

    def with_state(self, state: ListenState) -> "Track":
        return replace(self, state=state)

    def mark_listened(self) -> "Track":
        return self.with_state(ListenState.LISTENED)

    def copy(self) -> "Track":
        return replace(self)

    def plain(self) -> str:
        """Single-line form: [id, title, artist, duration, state-code]."""
        return (
            f"[{self.id}, {self.title}, {self.artist}, "
            f"{self.duration}, {int(self.state)}]"
        )

    def plain_print(self, sink: TextIO) -> int:
        """
        Write the single-line form to sink, without a line break.

        Returns:
            Number of characters written
        """
        text = self.plain()
        sink.write(text)
        return len(text)

    def formatted(self) -> str:
        """Multi-line "now playing" card."""
        minutes, seconds = divmod(self.duration, 60)
        return (
            f"\t ɴᴏᴡ ᴘʟᴀʏɪɴɢ: {self.title}\n"
            f"\t • Artist {self.artist} •\n"
            "\t──────────⚪──────────\n"
            "\t\t◄◄⠀▐▐ ⠀►►\n"
            f"\t 0:00 / {minutes:02d}:{seconds:02d} ───○ 🔊⠀\n\n"
        )

    def formatted_print(self, sink: TextIO) -> int:
        text = self.formatted()
        sink.write(text)
        return len(text)

    def to_descriptor(self, quoted: bool = True) -> str:
        """Descriptor that from_descriptor() with the same quoted flag parses back."""
        return format_descriptor(
            self.id,
            self.title,
            self.artist,
            self.duration,
            self.state.name,
            quoted=quoted,
        )


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_text(name: str, value: object) -> None:
    if not isinstance(value, str) or len(value) >= STR_LENGTH:
        raise MalformedDescriptorError(
            f"Invalid {name}: must be text shorter than {STR_LENGTH} characters"
        )
