"""Exception hierarchy for sensor queries."""

from __future__ import annotations


class SensorQueryError(Exception):
    """Base exception for all sensor query failures."""


class BusConnectionError(SensorQueryError):
    """Could not connect to the message bus. Fatal to the whole run."""


class BusCallError(SensorQueryError):
    """The GetAll call on one sensor object failed."""

    def __init__(self, message: str, *, object_path: str, error_name: str = "") -> None:
        self.object_path = object_path
        self.error_name = error_name
        super().__init__(message)


class DecodeError(SensorQueryError):
    """A property reply could not be turned into a sensor record."""

    def __init__(self, message: str, *, object_path: str) -> None:
        self.object_path = object_path
        super().__init__(message)


class ProtocolError(DecodeError):
    """The reply is not shaped as an array of (string, variant) entries."""


class TypeMismatchError(DecodeError):
    """``Value`` carried a type other than double or int64."""

    def __init__(self, message: str, *, object_path: str, tag: str) -> None:
        self.tag = tag
        super().__init__(message, object_path=object_path)


class MissingValueError(DecodeError):
    """The reply was well formed but held no ``Value`` property."""
