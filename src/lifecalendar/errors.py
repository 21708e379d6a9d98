"""Error types raised by the calendar engine and its loaders."""

from __future__ import annotations


class CalendarError(ValueError):
    """Base exception for lifecalendar errors."""


class InvalidDate(CalendarError):
    """Raised when a date string is not a valid ``YYYY-MM-DD`` calendar date."""

    def __init__(self, value: object, source: str | None = None) -> None:
        self.value = value
        self.source = source
        msg = f"Invalid date {value!r}. Use YYYY-MM-DD."
        super().__init__(f"{source}: {msg}" if source else msg)


class InvalidRange(CalendarError):
    """Raised when an entry has a missing date or ends before it starts."""


class ConfigError(CalendarError):
    """Raised when the configuration file cannot be read or has bad values."""


class DataNotFound(CalendarError):
    """Raised when no data directory exists for a requested year."""

    def __init__(self, year: int, path: object) -> None:
        self.year = year
        self.path = path
        super().__init__(f"Data for year {year} does not exist: {path}")
