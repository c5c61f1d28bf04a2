"""Library for absolute points in time at minute resolution.

A `MinInstant` is the authoritative representation of time in this library:
the number of whole minutes since 1970-01-01T00:00Z. It also carries the UTC
offset that it should be displayed in, but the offset never participates in
comparisons. Two instants that name the same minute are equal regardless of
how they are displayed.

```python
instant = MinInstant.from_date(Date.of(2023, 3, 14, 9, 30, offset=-240))
instant.to_date().no_tz_string()  # '2023/Mar/14 09:30'
instant.with_offset(ZoneOffset(0)).to_date().no_tz_string()  # '2023/Mar/14 13:30'
```
"""

from __future__ import annotations

import datetime
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Any

from ..exceptions import DateOverflowError, RefinementError, TimeOverflowError
from ..util import now_factory
from .const import EPOCH_YEAR, MIN_IN_DAY, MIN_IN_HR, U32_MAX
from .date import Date
from .month import Month
from .ranged import DayOfMonth, HourOfDay, MinuteCount, MinuteOfHour
from .utc_offset import ZoneOffset
from .year import Year, days_before_year

__all__ = ["MinInstant"]

EPOCH = datetime.datetime(EPOCH_YEAR, 1, 1, tzinfo=datetime.timezone.utc)
ONE_MINUTE = datetime.timedelta(minutes=1)


def _checked_add(total: int, minutes: int, date: Date) -> int:
    """Add minutes to a running total, failing outside of the 32-bit width."""
    total += minutes
    if total > U32_MAX:
        raise DateOverflowError(int(date.year), int(date.month), int(date.day))
    return total


@dataclass(frozen=True, eq=False)
class MinInstant:
    """Minutes since the epoch, displayed in a fixed UTC offset."""

    raw: MinuteCount
    offset: ZoneOffset = ZoneOffset(0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw", MinuteCount(self.raw))
        object.__setattr__(self, "offset", ZoneOffset(self.offset))

    @classmethod
    def from_date(cls, date: Date) -> MinInstant:
        """Convert a civil date to an instant, keeping its offset for display."""
        total = _checked_add(0, days_before_year(date.year) * MIN_IN_DAY, date)
        month: Month | None = Month.JAN
        while month is not None and month != date.month:
            total = _checked_add(total, month.num_min(date.year), date)
            month = month.next()
        total = _checked_add(total, (int(date.day) - 1) * MIN_IN_DAY, date)
        total = _checked_add(total, int(date.hour) * MIN_IN_HR, date)
        total = _checked_add(total, int(date.minute), date)
        total -= int(date.offset)
        try:
            return cls(MinuteCount(total), date.offset)
        except RefinementError as err:
            raise DateOverflowError(
                int(date.year), int(date.month), int(date.day)
            ) from err

    def to_date(self, offset: ZoneOffset | None = None) -> Date:
        """Decompose the instant into a civil date in the specified offset.

        The instant's own display offset is used when no offset is given.
        """
        if offset is None:
            offset = self.offset
        local = int(self.raw) + int(offset)
        if local < 0:
            raise TimeOverflowError(
                f"Instant {int(self.raw)} is before the epoch in offset {offset}"
            )
        days, minute_of_day = divmod(local, MIN_IN_DAY)
        # Underestimates the year, then steps forward.
        year_num = EPOCH_YEAR + days // 366
        while days_before_year(year_num + 1) <= days:
            year_num += 1
        year = Year(year_num)
        days -= days_before_year(year)
        month = Month.JAN
        while days >= (month_days := month.num_days(year)):
            days -= month_days
            if (next_month := month.next()) is None:
                raise TimeOverflowError(f"Day overflowed year {year}")
            month = next_month
        hour, minute = divmod(minute_of_day, MIN_IN_HR)
        return Date(
            year,
            month,
            DayOfMonth(days + 1),
            HourOfDay(hour),
            MinuteOfHour(minute),
            offset,
        )

    @classmethod
    def now(cls, offset: ZoneOffset | None = None) -> MinInstant:
        """Return the current minute, displayed in the specified offset."""
        return cls.from_datetime(now_factory(), offset)

    @classmethod
    def from_datetime(
        cls, value: datetime.datetime, offset: ZoneOffset | None = None
    ) -> MinInstant:
        """Convert a datetime, truncating seconds; naive values are UTC."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=datetime.timezone.utc)
        if offset is None:
            utcoffset = value.utcoffset() or datetime.timedelta()
            offset = ZoneOffset(utcoffset // ONE_MINUTE)
        try:
            return cls(MinuteCount((value - EPOCH) // ONE_MINUTE), offset)
        except RefinementError as err:
            raise TimeOverflowError(f"Datetime {value} is out of range") from err

    def to_datetime(self) -> datetime.datetime:
        """Return an aware datetime in the display offset."""
        tzinfo = datetime.timezone(datetime.timedelta(minutes=int(self.offset)))
        return (EPOCH + int(self.raw) * ONE_MINUTE).astimezone(tzinfo)

    def with_offset(self, offset: ZoneOffset) -> MinInstant:
        """Return the same instant displayed in a different offset."""
        return replace(self, offset=offset)

    def shift_minutes(self, minutes: int) -> MinInstant:
        """Return the instant moved by a signed number of minutes."""
        try:
            return replace(self, raw=MinuteCount(int(self.raw) + minutes))
        except RefinementError as err:
            raise TimeOverflowError(
                f"Shifting {int(self.raw)} by {minutes} minutes overflowed"
            ) from err

    def shift_days(self, days: int) -> MinInstant:
        """Return the instant moved by a signed number of whole days."""
        return self.shift_minutes(days * MIN_IN_DAY)

    def next_day(self) -> MinInstant:
        """Return the instant exactly one day later."""
        return self.shift_days(1)

    @classmethod
    def parse_from_str(
        cls, args: Sequence[str], default_offset: ZoneOffset
    ) -> MinInstant:
        """Parse human input, see `Date.parse_from_str`.

        A date without a year is read in the current year of the default offset.
        """
        current_year = cls.now(default_offset).to_date().year
        return cls.from_date(Date.parse_from_str(args, default_offset, current_year))

    def as_date_string(self) -> str:
        """Return the date in the display offset, without the offset."""
        return self.to_date().no_tz_string()

    def as_tz_date_string(self) -> str:
        """Return the date in the display offset, followed by the offset."""
        return str(self.to_date())

    def __str__(self) -> str:
        return self.as_date_string()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, MinInstant):
            return NotImplemented
        return self.raw == other.raw

    def __hash__(self) -> int:
        return hash(int(self.raw))

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, MinInstant):
            return NotImplemented
        return self.raw < other.raw

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, MinInstant):
            return NotImplemented
        return self.raw > other.raw

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, MinInstant):
            return NotImplemented
        return self.raw <= other.raw

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, MinInstant):
            return NotImplemented
        return self.raw >= other.raw
