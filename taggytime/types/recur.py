"""Implementation of the parsed recurrence rule of a calendar event.

A `Recur` is the bundle of values read from an RRULE property: the frequency,
the repeat interval, an optional COUNT or UNTIL bound, the BY* rule lists and
the week start. It is plain data; `recurrence.as_pattern` turns it
into the predicate and termination used to expand occurrences.

Only BYDAY rules are evaluated. Other BY* rules are rejected by the parser
rather than partially applied.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ..exceptions import UnsupportedRuleError
from .const import DAYS_IN_WEEK
from .date import Date
from .date_property import (
    AllOf,
    Always,
    DateProperty,
    InMonth,
    OnMonthDay,
    OnWeekday,
    from_weekdays,
)
from .instant import MinInstant
from .ranged import OccurrenceCount, RepeatInterval
from .utc_offset import ZoneOffset
from .weekday import Weekday

__all__ = ["Frequency", "RRuleToks", "Recur", "BYDAY"]

BYDAY = "BYDAY"


# Note: This can be StrEnum in python 3.11 and higher
class Frequency(str, enum.Enum):
    """Type of recurrence rule.

    Frequencies SECONDLY, MINUTELY and HOURLY are not supported.
    """

    DAILY = "DAILY"
    """Repeating events based on an interval of a day or more."""

    WEEKLY = "WEEKLY"
    """Repeating events based on an interval of a week or more."""

    MONTHLY = "MONTHLY"
    """Repeating events based on an interval of a month or more."""

    YEARLY = "YEARLY"
    """Repeating events based on an interval of a year or more."""

    def period(self, date: Date, week_start: Weekday = Weekday.MONDAY) -> int:
        """Return the number of the frequency period that contains the date.

        Periods are numbered consecutively, so the difference between two
        period numbers is the number of whole periods between two dates.
        """
        if self is Frequency.DAILY:
            return date.days_since_epoch()
        if self is Frequency.WEEKLY:
            shift = (
                Weekday.THURSDAY.days_after_monday - week_start.days_after_monday
            )
            return (date.days_since_epoch() + shift) // DAYS_IN_WEEK
        if self is Frequency.MONTHLY:
            return int(date.year) * 12 + int(date.month)
        return int(date.year)


@dataclass(frozen=True)
class RRuleToks:
    """The raw values of a single BY* clause of a recurrence rule."""

    tag: str
    """Name of the rule, e.g. BYDAY."""

    content: tuple[str, ...]
    """Comma separated values of the rule, e.g. ('MO', 'WE')."""

    def __str__(self) -> str:
        return f"{self.tag}={','.join(self.content)}"


class Recur(BaseModel):
    """A parsed recurrence rule.

    COUNT and UNTIL are mutually exclusive; the parser refuses rules that
    contain both.
    """

    model_config = ConfigDict(frozen=True)

    freq: Frequency

    interval: RepeatInterval = RepeatInterval(1)
    """Interval at which the recurrence rule repeats."""

    count: Optional[OccurrenceCount] = None
    """The number of occurrences to bound the recurrence."""

    until: Optional[MinInstant] = None
    """The inclusive end of the recurrence."""

    rules: tuple[RRuleToks, ...] = ()
    """BY* clauses in the order they appeared."""

    week_start: Weekday = Weekday.MONDAY
    """The day on which a week starts, used when the interval spans weeks."""

    @property
    def by_weekday(self) -> list[Weekday]:
        """Return the weekdays named by the BYDAY rule, if any."""
        result: list[Weekday] = []
        for rule in self.rules:
            if rule.tag != BYDAY:
                raise UnsupportedRuleError(f"Rule {rule.tag} is not implemented")
            result.extend(Weekday.parse(value) for value in rule.content)
        return result

    def as_date_property(self, dtstart: Date) -> DateProperty:
        """Return the predicate that occurrences of this rule must satisfy.

        Without a BYDAY rule, the predicate repeats the matching attribute of
        the first occurrence.
        """
        if weekdays := self.by_weekday:
            return from_weekdays(weekdays)
        if self.freq is Frequency.DAILY:
            return Always()
        if self.freq is Frequency.WEEKLY:
            return OnWeekday(weekday=dtstart.weekday())
        if self.freq is Frequency.MONTHLY:
            return OnMonthDay(day=dtstart.day)
        return AllOf(props=(InMonth(month=dtstart.month), OnMonthDay(day=dtstart.day)))

    def as_rrule_str(self) -> str:
        """Return the rule encoded as an RRULE value."""
        parts = [f"FREQ={self.freq.value}"]
        if self.interval != 1:
            parts.append(f"INTERVAL={self.interval}")
        if self.count is not None:
            parts.append(f"COUNT={self.count}")
        if self.until is not None:
            date = self.until.to_date(ZoneOffset.utc())
            parts.append(
                f"UNTIL={int(date.year):04}{int(date.month):02}{int(date.day):02}"
                f"T{int(date.hour):02}{int(date.minute):02}00Z"
            )
        parts.extend(str(rule) for rule in self.rules)
        if self.week_start is not Weekday.MONDAY:
            parts.append(f"WKST={self.week_start}")
        return ";".join(parts)

    def __str__(self) -> str:
        return self.as_rrule_str()
