"""
Radio bulk text format.

Reading and writing the line-oriented format:

    <K>
    <track descriptor 1>
    ...
    <track descriptor K>
    <orig id> <dest id> [<dest id> ...]
    ...

The first non-blank line holds the number of descriptor lines that follow.
Every later line is an origin id followed by the ids it recommends; blank
relation lines are skipped.

read_radio() applies each track and relation to the given radio as it goes. A
failure stops the load but does NOT undo what was already applied, so the
radio is left partially loaded. Use load_radio()/loads_radio(), which build a
fresh radio and only return it on success, when that matters.
"""

import io
import os
import re
from pathlib import Path
from typing import Iterator, Optional, TextIO, Union

from loguru import logger

from music_radio.domain.exceptions import (
    CapacityExceededError,
    MalformedDescriptorError,
    RadioError,
    RadioFormatError,
    RadioIOError,
    UnknownIdError,
)

from .store import DEFAULT_CAPACITY, Radio

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def _numbered_lines(stream: TextIO) -> Iterator[tuple[int, str]]:
    """Yield (line_number, line without terminator), wrapping read errors."""
    line_number = 0
    while True:
        try:
            line = stream.readline()
        except (OSError, UnicodeDecodeError) as e:
            raise RadioIOError(f"Failed to read radio input: {e}") from e
        if not line:
            return
        line_number += 1
        yield line_number, line.rstrip("\r\n")


def _parse_id(token: str, line_number: int) -> int:
    if not _INT_PATTERN.fullmatch(token):
        raise RadioFormatError(f"Invalid track id {token!r}", line_number)
    return int(token)


def read_radio(
    stream: TextIO, radio: Radio, quoted: Optional[bool] = None
) -> Radio:
    """
    Read the bulk text format from stream into radio.

    Args:
        stream: Readable text stream
        radio: Radio to fill; partially filled if an error is raised
        quoted: Whether double-quoted descriptor values are dequoted
            (default: the radio's quoted_values)

    Returns:
        The same radio, for chaining

    Raises:
        RadioFormatError: Bad or missing count, missing descriptor lines,
            non-integer relation tokens
        MalformedDescriptorError: Invalid track descriptor
        CapacityExceededError: Count or tracks exceed the radio capacity
        UnknownIdError: Relation naming an id that is not in the radio
        RadioIOError: The stream could not be read
    """
    lines = _numbered_lines(stream)
    try:
        expected = _read_count(lines, radio.capacity)
        logger.debug(f"Reading {expected} tracks")
        _read_tracks(lines, radio, expected, quoted)
        relations = _read_relations(lines, radio)
    except RadioError as e:
        logger.warning(f"Radio load failed: {e}")
        raise

    logger.debug(
        f"Radio loaded: {radio.track_count} tracks, {relations} relation entries read"
    )
    return radio


def _read_count(lines: Iterator[tuple[int, str]], capacity: int) -> int:
    for line_number, line in lines:
        text = line.strip()
        if not text:
            continue
        if not _INT_PATTERN.fullmatch(text):
            raise RadioFormatError(f"Invalid track count {text!r}", line_number)
        count = int(text)
        if count < 0:
            raise RadioFormatError(f"Negative track count {count}", line_number)
        if count > capacity:
            raise CapacityExceededError(
                capacity,
                f"line {line_number}: {count} tracks exceed radio capacity {capacity}",
            )
        return count
    raise RadioFormatError("Missing track count")


def _read_tracks(
    lines: Iterator[tuple[int, str]],
    radio: Radio,
    expected: int,
    quoted: Optional[bool],
) -> None:
    for read in range(expected):
        try:
            line_number, line = next(lines)
        except StopIteration:
            raise RadioFormatError(
                f"Expected {expected} track descriptors, found {read}"
            ) from None
        try:
            radio.new_track(line, quoted=quoted)
        except MalformedDescriptorError as e:
            raise MalformedDescriptorError(str(e), line_number) from e


def _read_relations(lines: Iterator[tuple[int, str]], radio: Radio) -> int:
    count = 0
    for line_number, line in lines:
        tokens = line.split()
        if not tokens:
            continue
        ids = [_parse_id(token, line_number) for token in tokens]
        orig = ids[0]
        for dest in ids[1:]:
            try:
                radio.new_relation(orig, dest)
            except UnknownIdError as e:
                raise UnknownIdError(e.track_id, line_number) from e
            count += 1
    return count


def load_radio(
    source: Union[str, os.PathLike, TextIO],
    capacity: Optional[int] = None,
    quoted: bool = True,
) -> Radio:
    """
    Load a new radio from a file path or an open text stream.

    The radio is only returned when the whole input loads; on error it is
    discarded.

    Args:
        source: Path to a radio file, or a readable text stream
        capacity: Radio capacity (default: DEFAULT_CAPACITY)
        quoted: Whether double-quoted descriptor values are dequoted

    Returns:
        The loaded radio

    Raises:
        RadioError: Any error from read_radio(), or RadioIOError if the file
            cannot be opened
    """
    radio = Radio(
        capacity=DEFAULT_CAPACITY if capacity is None else capacity,
        quoted_values=quoted,
    )

    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        try:
            f = open(path, encoding="utf-8")
        except OSError as e:
            raise RadioIOError(f"Could not open radio file {path}: {e}") from e
        with f:
            return read_radio(f, radio, quoted=quoted)

    return read_radio(source, radio, quoted=quoted)


def loads_radio(
    text: str, capacity: Optional[int] = None, quoted: bool = True
) -> Radio:
    """Load a new radio from a string in the bulk text format."""
    return load_radio(io.StringIO(text), capacity=capacity, quoted=quoted)


def write_radio(radio: Radio, sink: TextIO, quoted: Optional[bool] = None) -> int:
    """
    Write radio in the bulk text format that read_radio() accepts.

    Tracks are written in insertion order as descriptors, then one relation
    line per track that recommends anything. Read the output back with the
    same quoting mode to get the same tracks and relations.

    Args:
        radio: Radio to write
        sink: Writable text stream
        quoted: Quote title and artist values (default: the radio's quoted_values)

    Returns:
        Total number of characters written

    Raises:
        MalformedDescriptorError: If a track title/artist cannot be written in
            the chosen quoting mode
        RadioIOError: If writing to sink fails
    """
    if quoted is None:
        quoted = radio.quoted_values

    lines = [str(radio.track_count)]
    lines.extend(track.to_descriptor(quoted=quoted) for track in radio.tracks())
    for track in radio.tracks():
        successors = radio.successor_ids(track.id)
        if successors:
            ids = [track.id, *successors]
            lines.append(" ".join(str(track_id) for track_id in ids))

    total = 0
    try:
        for line in lines:
            sink.write(line + "\n")
            total += len(line) + 1
    except OSError as e:
        logger.warning(f"Radio write failed after {total} characters: {e}")
        raise RadioIOError(f"Failed to write radio: {e}") from e

    logger.debug(
        f"Wrote radio: {radio.track_count} tracks, {radio.relation_count} relations"
    )
    return total


def dumps_radio(radio: Radio, quoted: Optional[bool] = None) -> str:
    """Return radio in the bulk text format as a string."""
    buffer = io.StringIO()
    write_radio(radio, buffer, quoted=quoted)
    return buffer.getvalue()


__all__ = [
    "read_radio",
    "load_radio",
    "loads_radio",
    "write_radio",
    "dumps_radio",
]
