"""Library for civil years since the epoch."""

from __future__ import annotations

import enum

from ..exceptions import DateOverflowError
from .const import EPOCH_YEAR, MAX_YEAR, MIN_IN_DAY, MINUTE_UPPERBOUND
from .ranged import RangedInt

__all__ = ["Year", "YearLength", "days_before_year"]


class YearLength(str, enum.Enum):
    """The length of a year."""

    LEAP = "LEAP"
    COMMON = "COMMON"


def _leap_years_through(year: int) -> int:
    """Return the number of leap years in [1, year]."""
    return year // 4 - year // 100 + year // 400


_LEAP_YEARS_BEFORE_EPOCH = _leap_years_through(EPOCH_YEAR - 1)


def days_before_year(year: int) -> int:
    """Return the number of days from the epoch to the start of the year."""
    return 365 * (year - EPOCH_YEAR) + (
        _leap_years_through(year - 1) - _LEAP_YEARS_BEFORE_EPOCH
    )


class Year(RangedInt, lower=EPOCH_YEAR, upper=MAX_YEAR):
    """A civil year, no earlier than the epoch.

    A leap year is divisible by 4, unless it is divisible by 100, unless it
    is also divisible by 400.
    """

    @property
    def length(self) -> YearLength:
        """Return the length of the year, either leap or common."""
        if self % 400 == 0 or (self % 4 == 0 and self % 100 != 0):
            return YearLength.LEAP
        return YearLength.COMMON

    @property
    def is_leap(self) -> bool:
        """Return True if this is a leap year."""
        return self.length == YearLength.LEAP

    @property
    def days_in_year(self) -> int:
        """Return 366 for a leap year, or 365 for a common year."""
        return 366 if self.is_leap else 365

    @property
    def num_min(self) -> int:
        """Return the number of minutes in the year."""
        return self.days_in_year * MIN_IN_DAY

    @property
    def since_epoch(self) -> int:
        """Return the number of whole years since the epoch."""
        return int(self) - EPOCH_YEAR

    def minutes_since_epoch(self) -> int:
        """Return the number of minutes from the epoch to the start of the year."""
        minutes = days_before_year(self) * MIN_IN_DAY
        if minutes > MINUTE_UPPERBOUND:
            raise DateOverflowError(int(self), 1, 1)
        return minutes

    def next(self) -> Year | None:
        """Return the following year, or None past the last year."""
        if self >= self.MAX:
            return None
        return Year(self + 1)

    def previous(self) -> Year | None:
        """Return the preceding year, or None before the epoch."""
        if self <= self.MIN:
            return None
        return Year(self - 1)
