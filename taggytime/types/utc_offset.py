"""Library for parsing and encoding fixed UTC offsets."""

from __future__ import annotations

import re

from .const import MIN_IN_HR, UTC_LOWERBOUND, UTC_UPPERBOUND
from .ranged import RangedInt

__all__ = ["ZoneOffset"]

UTC_OFFSET_REGEX = re.compile(r"^(?:UTC|GMT)?([-+]?)([0-9]{1,2})(?::?([0-9]{2}))?$")


class ZoneOffset(RangedInt, lower=UTC_LOWERBOUND, upper=UTC_UPPERBOUND):
    """A difference from UTC, in minutes.

    Only offsets between -12:00 and +14:00 inclusive can be constructed. An
    offset is a fixed number and never refers to a named timezone.
    """

    @classmethod
    def utc(cls) -> ZoneOffset:
        """Return the zero offset."""
        return cls(0)

    @classmethod
    def parse(cls, value: str) -> ZoneOffset:
        """Parse an offset such as '-4:00', '+0530', '-04', 'UTC' or 'UTC+8'."""
        value = value.strip().upper()
        if value in ("Z", "UTC", "GMT"):
            return cls.utc()
        if not (match := UTC_OFFSET_REGEX.fullmatch(value)):
            raise ValueError(f"Expected value to match UTC offset pattern: {value}")
        sign, hours, minutes = match.groups()
        result = int(hours) * MIN_IN_HR + int(minutes or 0)
        if sign == "-":
            result = -result
        return cls(result)

    def as_hours_minutes(self) -> str:
        """Return the offset encoded as '+HH:MM'."""
        sign = "-" if self < 0 else "+"
        hours, minutes = divmod(abs(int(self)), MIN_IN_HR)
        return f"{sign}{hours:02}:{minutes:02}"

    def __str__(self) -> str:
        return f"UTC{self.as_hours_minutes()}"
