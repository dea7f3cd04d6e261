"""Error taxonomy for report decoding.

Every decode failure is a ``DecodeError`` naming the field that failed. Callers
treat any of them as "no usable record".
"""

from __future__ import annotations


class DecodeError(Exception):
    """Base decode failure: which field failed and why."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class MissingField(DecodeError):
    """A required group did not match at its position."""


class StationError(MissingField):
    def __init__(self, message: str = "no station identifier at start of report") -> None:
        super().__init__("station", message)


class ConversionError(DecodeError):
    """Captured text could not be converted to the expected value."""


class ReferenceDateError(DecodeError):
    def __init__(self, message: str) -> None:
        super().__init__("reference_date", message)


class PressureError(DecodeError):
    def __init__(self, message: str) -> None:
        super().__init__("pressure", message)


class SourceError(ValueError):
    """Station text did not hold a reference line and a report line."""


class ConfigError(ValueError):
    """Decoder configuration file could not be used."""
