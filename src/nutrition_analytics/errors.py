"""Errors raised by the analytics services."""


class AnalyticsError(Exception):
    """Base class for analytics input errors."""


class InvalidDateError(AnalyticsError, ValueError):
    """Raised when a date string is not a real YYYY-MM-DD calendar date."""

    def __init__(self, raw: str, field: str = "date") -> None:
        super().__init__(f"Invalid {field} format. Use YYYY-MM-DD")
        self.raw = raw
        self.field = field


class InvalidDateRangeError(AnalyticsError, ValueError):
    """Raised when a date range starts after it ends."""

    def __init__(self) -> None:
        super().__init__("from date must be before or equal to to date")


class MissingParameterError(AnalyticsError, ValueError):
    """Raised when a required query parameter is absent."""


class InvalidTimezoneError(AnalyticsError, ValueError):
    """Raised when a timezone name is not known to zoneinfo."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown timezone: {name}")
        self.name = name
