"""Library for civil calendar dates.

A `Date` is a human readable decomposition of an instant: year, month, day,
hour and minute, plus the UTC offset that was used to produce it. A `Date` is
derived rather than authoritative, and is always convertible to and from a
`MinInstant`.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from ..exceptions import MalformedDateError, RangedIntOverflowError, RefinementError
from .const import HR_IN_DAY, MIN_IN_HR
from .month import Month
from .ranged import DayOfMonth, HourOfDay, MinuteOfHour
from .utc_offset import ZoneOffset
from .weekday import Weekday
from .year import Year, days_before_year

__all__ = ["Date"]

ICS_DATE_REGEX = re.compile(r"^([0-9]{4})([0-9]{2})([0-9]{2})$")
ICS_TIME_REGEX = re.compile(r"^([0-9]{2})([0-9]{2})([0-9]{2})$")


@dataclass(frozen=True)
class Date:
    """A time instance in human readable form, with the offset used to derive it."""

    year: Year
    month: Month
    day: DayOfMonth
    hour: HourOfDay
    minute: MinuteOfHour
    offset: ZoneOffset

    def __post_init__(self) -> None:
        """Coerce plain integers into their bounded types and check the day."""
        object.__setattr__(self, "year", Year(self.year))
        object.__setattr__(self, "month", Month(self.month))
        object.__setattr__(self, "day", DayOfMonth(self.day))
        object.__setattr__(self, "hour", HourOfDay(self.hour))
        object.__setattr__(self, "minute", MinuteOfHour(self.minute))
        object.__setattr__(self, "offset", ZoneOffset(self.offset))
        if (num_days := self.month.num_days(self.year)) < self.day:
            raise RangedIntOverflowError(int(self.day), 1, num_days)

    @classmethod
    def of(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        offset: int = 0,
    ) -> Date:
        """Create a Date from plain integers."""
        return cls(
            Year(year),
            Month(month),
            DayOfMonth(day),
            HourOfDay(hour),
            MinuteOfHour(minute),
            ZoneOffset(offset),
        )

    def day_in_year(self) -> int:
        """Return the day within the year, starting from 1."""
        days = int(self.day)
        month: Month | None = Month.JAN
        while month is not None and month != self.month:
            days += month.num_days(self.year)
            month = month.next()
        return days

    def days_since_epoch(self) -> int:
        """Return the number of whole local days from the epoch to this date."""
        return days_before_year(self.year) + self.day_in_year() - 1

    def weekday(self) -> Weekday:
        """Return the day of the week of this date."""
        return Weekday.from_days_since_epoch(self.days_since_epoch())

    @classmethod
    def from_ics_time_string(cls, ymd: str, hms: str, offset: ZoneOffset) -> Date:
        """Construct a Date from an ics `yyyymmdd` and `hhmmss` literal pair.

        Seconds are accepted but discarded.
        """
        if not (date_match := ICS_DATE_REGEX.fullmatch(ymd)) or not (
            time_match := ICS_TIME_REGEX.fullmatch(hms)
        ):
            raise MalformedDateError(ymd, hms)
        year, month, day = (int(value) for value in date_match.groups())
        hour, minute, _ = (int(value) for value in time_match.groups())
        try:
            return cls(
                Year(year),
                Month(month),
                DayOfMonth(day),
                HourOfDay(hour),
                MinuteOfHour(minute),
                offset,
            )
        except (RefinementError, ValueError) as err:
            raise MalformedDateError(ymd, hms) from err

    @classmethod
    def parse_from_str(
        cls,
        args: Sequence[str],
        default_offset: ZoneOffset,
        current_year: Year | None = None,
    ) -> Date:
        """Parse a date from human input.

        The input is `[date, time]` or `[date, time, offset]`, where date is
        `yyyy/mm/dd` or `mm/dd` (in the current year), the month may be a number
        or a name, time is `hh` or `hh:mm`, and offset is any value accepted by
        `ZoneOffset.parse`.
        """
        if not 2 <= len(args) <= 3:
            raise ValueError(f"Expected a date, a time and an optional offset: {args}")
        offset = ZoneOffset.parse(args[2]) if len(args) == 3 else default_offset
        year, month, day = _parse_ymd(args[0], current_year)
        hour, minute = _parse_hr_min(args[1])
        try:
            return cls(year, month, DayOfMonth(day), hour, minute, offset)
        except RefinementError as err:
            raise ValueError(f"Date out of range: {args}") from err

    def no_tz_string(self) -> str:
        """Return a string representation of the date that hides its offset."""
        return (
            f"{self.year}/{self.month.label}/{self.day} "
            f"{int(self.hour):02}:{int(self.minute):02}"
        )

    def __str__(self) -> str:
        return f"{self.no_tz_string()}, tz={self.offset}"


def _parse_int(value: str) -> int:
    """Parse a non-negative integer from human input."""
    value = value.strip()
    if not value.isdigit():
        raise ValueError(f"`{value}` is not a number")
    return int(value)


def _parse_ymd(value: str, current_year: Year | None) -> tuple[Year, Month, int]:
    """Parse `yyyy/mm/dd` or `mm/dd` into its parts."""
    parts = [part.strip() for part in value.split("/")]
    if len(parts) == 3:
        year = Year(_parse_int(parts[0]))
        parts = parts[1:]
    elif len(parts) == 2:
        if current_year is None:
            raise ValueError(f"Date `{value}` has no year")
        year = current_year
    else:
        raise ValueError(f"Expected yyyy/mm/dd or mm/dd: {value}")
    month = Month.parse(parts[0])
    day = _parse_int(parts[1])
    if not 1 <= day <= month.num_days(year):
        raise ValueError(f"Day {day} is out of range for {month.label} {year}")
    return year, month, day


def _parse_hr_min(value: str) -> tuple[HourOfDay, MinuteOfHour]:
    """Parse `hh:mm` or `hh`; minutes default to zero."""
    hour_str, _, minute_str = value.partition(":")
    hour = _parse_int(hour_str)
    minute = _parse_int(minute_str) if minute_str else 0
    if hour >= HR_IN_DAY or minute >= MIN_IN_HR:
        raise ValueError(f"Cannot parse `{value}` as a time of day")
    return HourOfDay(hour), MinuteOfHour(minute)
