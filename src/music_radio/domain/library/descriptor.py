"""
Track descriptor parsing.

A descriptor is a line of whitespace separated `key:value` tokens, e.g.

    id:111 title:"Paint It, Black" artist:"The Rolling Stones" duration:202 state:0

Recognized keys are id, title, artist, duration and state. When quoting is
enabled, a double quote anywhere in a token opens or closes a quoted run, not
only around a whole value: whitespace inside the run belongs to the token and
the quote marks are dropped. A lone quote, as in title:Don"t, leaves the run
open and is an error. Without quoting every character is kept verbatim.
"""

import re
from typing import Dict, List

from music_radio.domain.exceptions import MalformedDescriptorError

DESCRIPTOR_KEYS = ("id", "title", "artist", "duration", "state")

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def split_descriptor(descriptor: str, quoted: bool = True) -> List[str]:
    """
    Split a descriptor into its key:value tokens.

    Args:
        descriptor: Raw descriptor text
        quoted: Treat double-quoted runs as part of a single token

    Returns:
        List of tokens, quotes removed when quoted is True

    Raises:
        MalformedDescriptorError: If a quote is left open

    Example:
        'id:1 title:"Golden Hour"' -> ['id:1', 'title:Golden Hour']
    """
    if not quoted:
        return descriptor.split()

    tokens = []
    current = []
    in_quote = False
    has_token = False  # title:"" is a token even though it adds no characters

    for char in descriptor:
        if char == '"':
            in_quote = not in_quote
            has_token = True
        elif char.isspace() and not in_quote:
            if has_token:
                tokens.append("".join(current))
                current = []
                has_token = False
        else:
            current.append(char)
            has_token = True

    if in_quote:
        raise MalformedDescriptorError(f"Unterminated quote in descriptor: {descriptor!r}")
    if has_token:
        tokens.append("".join(current))

    return tokens


def parse_descriptor(descriptor: str, quoted: bool = True) -> Dict[str, str]:
    """
    Parse a descriptor into raw field values keyed by field name.

    Args:
        descriptor: Raw descriptor text
        quoted: Whether double-quoted values are dequoted

    Returns:
        Mapping of key to raw value, only for keys present in the descriptor

    Raises:
        MalformedDescriptorError: On a token without ':' or an unknown key
    """
    fields: Dict[str, str] = {}
    for token in split_descriptor(descriptor, quoted=quoted):
        key, separator, value = token.partition(":")
        if not separator:
            raise MalformedDescriptorError(f"Missing ':' in token {token!r}")
        if key not in DESCRIPTOR_KEYS:
            raise MalformedDescriptorError(f"Unknown key {key!r}")
        fields[key] = value
    return fields


def parse_int(name: str, raw: str) -> int:
    """Parse a numeric field, rejecting anything but an optionally signed integer."""
    if not _INT_PATTERN.fullmatch(raw):
        raise MalformedDescriptorError(f"Invalid {name}: {raw!r}")
    return int(raw)


def format_descriptor(
    track_id: int,
    title: str,
    artist: str,
    duration: int,
    state: str,
    quoted: bool = True,
) -> str:
    """
    Build a descriptor line from field values.

    Args:
        quoted: Wrap title and artist in double quotes. When False the values
            are written verbatim, as parse_descriptor(quoted=False) reads them.

    Raises:
        MalformedDescriptorError: If a text field cannot be written so that it
            parses back to the same value
    """
    for name, value in (("title", title), ("artist", artist)):
        if quoted:
            unwritable = any(char in value for char in '"\r\n')
        else:
            unwritable = any(char.isspace() for char in value)
        if unwritable:
            mode = "quoted" if quoted else "unquoted"
            raise MalformedDescriptorError(
                f"Cannot write {name} {value!r} as an {mode} descriptor value"
            )

    if quoted:
        title, artist = f'"{title}"', f'"{artist}"'
    return (
        f"id:{track_id} title:{title} artist:{artist} "
        f"duration:{duration} state:{state}"
    )


__all__ = [
    "DESCRIPTOR_KEYS",
    "split_descriptor",
    "parse_descriptor",
    "parse_int",
    "format_descriptor",
]
