"""Library for days of the week."""

from __future__ import annotations

import enum

from .const import DAYS_IN_WEEK

__all__ = ["Weekday", "WEEKDAYS"]


# Note: This can be StrEnum in python 3.11 and higher
class Weekday(str, enum.Enum):
    """Corresponds to a day of the week, using the rfc5545 BYDAY codes."""

    MONDAY = "MO"
    TUESDAY = "TU"
    WEDNESDAY = "WE"
    THURSDAY = "TH"
    FRIDAY = "FR"
    SATURDAY = "SA"
    SUNDAY = "SU"

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @property
    def days_after_monday(self) -> int:
        """Return the number of days after Monday."""
        return WEEKDAYS.index(self)

    def next_wrap(self) -> Weekday:
        """Return the following day of the week, wrapping after Sunday."""
        return WEEKDAYS[(self.days_after_monday + 1) % DAYS_IN_WEEK]

    @classmethod
    def from_days_since_epoch(cls, days: int) -> Weekday:
        """Return the weekday that is `days` after the epoch, which was a Thursday."""
        return WEEKDAYS[(Weekday.THURSDAY.days_after_monday + days) % DAYS_IN_WEEK]

    @classmethod
    def parse(cls, value: str) -> Weekday:
        """Parse an rfc5545 weekday code such as 'MO'."""
        try:
            return cls(value.strip().upper())
        except ValueError as err:
            raise ValueError(f"Expected a weekday code (MO..SU): {value}") from err


WEEKDAYS: list[Weekday] = [
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
    Weekday.SATURDAY,
    Weekday.SUNDAY,
]
