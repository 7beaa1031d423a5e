"""Radio store exceptions for error handling."""

from typing import Optional


class RadioError(Exception):
    """Base exception for radio store operations."""

    pass


class CapacityExceededError(RadioError):
    """Raised when a track is inserted into a full radio."""

    def __init__(self, capacity: int, message: str = None):
        self.capacity = capacity
        super().__init__(message or f"Radio is full ({capacity} tracks)")


class RadioFormatError(RadioError, ValueError):
    """Raised when radio text input does not follow the bulk load format."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class MalformedDescriptorError(RadioFormatError):
    """Raised when a track descriptor or track field is invalid."""

    pass


class UnknownIdError(RadioError, KeyError):
    """Raised when a relation references a track id not in the radio."""

    def __init__(self, track_id: int, line_number: Optional[int] = None):
        self.track_id = track_id
        self.line_number = line_number
        super().__init__(track_id)

    def __str__(self) -> str:
        message = f"Unknown track id: {self.track_id}"
        if self.line_number is not None:
            return f"line {self.line_number}: {message}"
        return message


class RadioIOError(RadioError, OSError):
    """Raised when reading from or writing to a stream fails."""

    pass


__all__ = [
    "RadioError",
    "CapacityExceededError",
    "RadioFormatError",
    "MalformedDescriptorError",
    "UnknownIdError",
    "RadioIOError",
]
