"""Exceptions for taggytime library.

Errors form a closed hierarchy so that calling code can branch on the kind of
failure rather than matching on message text. Construction, lexical, syntactic
and semantic errors are recoverable. A `TimeOverflowError` signals that some
time arithmetic left the representable range and the current operation should
be abandoned.
"""

from __future__ import annotations

from typing import Any


class CalendarError(Exception):
    """Base exception for all taggytime errors."""


class CalendarParseError(CalendarError):
    """Exception raised when parsing an ics string.

    The 'message' attribute contains a human-readable message about the
    error that occurred. The 'detailed_error' attribute can provide additional
    information about the error, such as the line and column of the offending
    token, useful for debugging purposes.
    """

    def __init__(self, message: str, *, detailed_error: str | None = None) -> None:
        """Initialize the CalendarParseError with a message."""
        super().__init__(message)
        self.message = message
        self.detailed_error = detailed_error


class EndOfInputError(CalendarParseError):
    """Exception raised when the input ended while more tokens were required."""

    def __init__(self, *, detailed_error: str | None = None) -> None:
        super().__init__("Unexpected end of input", detailed_error=detailed_error)


class NotANumberError(CalendarParseError):
    """Exception raised when a numeric literal was expected."""

    def __init__(self, token: Any, *, detailed_error: str | None = None) -> None:
        super().__init__(f"`{token}` is not a number", detailed_error=detailed_error)
        self.token = token


class MalformedDateError(CalendarParseError):
    """Exception raised when a `yyyymmdd` / `hhmmss` literal is not a valid time."""

    def __init__(self, ymd: str, hms: str, *, detailed_error: str | None = None) -> None:
        super().__init__(
            f"Cannot parse `{ymd}/{hms}` as valid time", detailed_error=detailed_error
        )
        self.ymd = ymd
        self.hms = hms


class MalformedListError(CalendarParseError):
    """Exception raised when a comma separated rule list is malformed."""

    def __init__(
        self, previous: Any, token: Any, *, detailed_error: str | None = None
    ) -> None:
        super().__init__(
            f"List malformed with elements {previous} {token}",
            detailed_error=detailed_error,
        )
        self.previous = previous
        self.token = token


class InvalidFrequencyError(CalendarParseError):
    """Exception raised for an unknown or unsupported FREQ value."""

    def __init__(self, token: Any, *, detailed_error: str | None = None) -> None:
        super().__init__(f"{token} is invalid freq", detailed_error=detailed_error)
        self.token = token


class UntilAndCountError(CalendarParseError):
    """Exception raised when a recurrence rule has both COUNT and UNTIL.

    The two are mutually exclusive ways to bound a recurrence, so neither is
    preferred over the other.
    """

    def __init__(self, count: int, until: Any, *, detailed_error: str | None = None) -> None:
        super().__init__(
            f"count=`{count}` and until=`{until}` cannot both appear",
            detailed_error=detailed_error,
        )
        self.count = count
        self.until = until


class TokenMismatchError(CalendarParseError):
    """Exception raised when a required token did not match the input."""

    def __init__(
        self, expected: Any, actual: Any, *, detailed_error: str | None = None
    ) -> None:
        super().__init__(
            f"Expected {expected}, found {actual}", detailed_error=detailed_error
        )
        self.expected = expected
        self.actual = actual


class MissingPropertyError(CalendarParseError):
    """Exception raised when a VEVENT lacks DTSTART or DTEND."""

    def __init__(
        self, property_name: str, summary: str, *, detailed_error: str | None = None
    ) -> None:
        super().__init__(
            f"VEVENT `{summary}` missing {property_name.lower()}",
            detailed_error=detailed_error,
        )
        self.property_name = property_name
        self.summary = summary


class UnsupportedRuleError(CalendarParseError):
    """Exception raised for recurrence rule parts that are not implemented.

    Partially evaluating a rule would silently produce the wrong set of
    occurrences, so parsing stops instead.
    """


class FileExtensionError(CalendarError):
    """Exception raised when loading a calendar from a file that is not `.ics`."""

    def __init__(self, path: Any) -> None:
        super().__init__(f"`{path}` is not an .ics file")
        self.path = path


class RefinementError(CalendarError, ValueError):
    """Exception raised when a bounded value is constructed out of range."""

    def __init__(self, message: str, value: int, lower: int, upper: int) -> None:
        super().__init__(message)
        self.value = value
        self.lower = lower
        self.upper = upper


class RangedIntUnderflowError(RefinementError):
    """Exception raised when a bounded integer is below its lower bound."""

    def __init__(self, value: int, lower: int, upper: int) -> None:
        super().__init__(
            f"{value} is below the range [{lower}, {upper}]", value, lower, upper
        )


class RangedIntOverflowError(RefinementError):
    """Exception raised when a bounded integer is above its upper bound."""

    def __init__(self, value: int, lower: int, upper: int) -> None:
        super().__init__(
            f"{value} is above the range [{lower}, {upper}]", value, lower, upper
        )


class TimeOverflowError(CalendarError, OverflowError):
    """Exception raised when time arithmetic leaves the representable range.

    This indicates a logic error or corrupt input, not a routine failure.
    """


class DateOverflowError(TimeOverflowError):
    """Exception raised when a civil date cannot be converted to an instant."""

    def __init__(self, year: int, month: int, day: int) -> None:
        super().__init__(
            "Date -> MinInstant conversion overflowed with date "
            f"{year}/{month}/{day}"
        )
        self.year = year
        self.month = month
        self.day = day


class RecurrenceError(CalendarError):
    """Exception raised when evaluating a recurrence rule.

    Recurrence rules have complex logic and it is common for there to be
    rules that can never be satisfied, so this special exception exists to
    provide additional debug data to find the source of the issue.
    """


class StoreError(CalendarError):
    """Exception thrown by a Store."""


class NameExistsError(StoreError):
    """Exception thrown when inserting a name that is already in use."""


class NameNotFoundError(StoreError):
    """Exception thrown when a name is not in the store."""
