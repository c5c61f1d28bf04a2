"""Library for months of the year."""

from __future__ import annotations

import enum

from .const import MIN_IN_DAY
from .year import Year

__all__ = ["Month"]


_THIRTY_DAY_MONTHS = {4, 6, 9, 11}


class Month(enum.IntEnum):
    """A month of the year, numbered from 1."""

    JAN = 1
    FEB = 2
    MAR = 3
    APR = 4
    MAY = 5
    JUN = 6
    JUL = 7
    AUG = 8
    SEP = 9
    OCT = 10
    NOV = 11
    DEC = 12

    @property
    def label(self) -> str:
        """Return the short display name, e.g. 'Mar'."""
        return self.name.title()

    def next(self) -> Month | None:
        """Return the following month, or None after December."""
        if self is Month.DEC:
            return None
        return Month(self + 1)

    def previous(self) -> Month | None:
        """Return the preceding month, or None before January."""
        if self is Month.JAN:
            return None
        return Month(self - 1)

    def num_days(self, year: Year) -> int:
        """Return the number of days in this month of the specified year."""
        if self is Month.FEB:
            return 29 if year.is_leap else 28
        if self in _THIRTY_DAY_MONTHS:
            return 30
        return 31

    def num_min(self, year: Year) -> int:
        """Return the number of minutes in this month of the specified year."""
        return self.num_days(year) * MIN_IN_DAY

    @classmethod
    def parse(cls, value: str) -> Month:
        """Parse a month number or English name such as '3', 'Mar' or 'march'."""
        value = value.strip()
        if value.isdigit():
            return cls(int(value))
        key = value[:3].upper()
        if len(value) >= 3 and key in cls.__members__:
            full_name = MONTH_NAMES[cls[key]]
            if full_name.startswith(value.lower()):
                return cls[key]
        raise ValueError(f"Unable to parse month: {value}")


MONTH_NAMES = {
    Month.JAN: "january",
    Month.FEB: "february",
    Month.MAR: "march",
    Month.APR: "april",
    Month.MAY: "may",
    Month.JUN: "june",
    Month.JUL: "july",
    Month.AUG: "august",
    Month.SEP: "september",
    Month.OCT: "october",
    Month.NOV: "november",
    Month.DEC: "december",
}
