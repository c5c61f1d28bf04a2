"""Library for minute resolution calendar arithmetic and value types."""

from .date import Date
from .date_property import (
    AllOf,
    Always,
    AnyOf,
    DateProperty,
    InMonth,
    OnMonthDay,
    OnWeekday,
    from_weekdays,
)
from .instant import MinInstant
from .month import Month
from .ranged import (
    DayOfMonth,
    HourOfDay,
    MinuteCount,
    MinuteOfHour,
    OccurrenceCount,
    OccurrenceIndex,
    RangedInt,
    RepeatInterval,
)
from .recur import Frequency, Recur, RRuleToks
from .utc_offset import ZoneOffset
from .weekday import WEEKDAYS, Weekday
from .year import Year, YearLength

__all__ = [
    "AllOf",
    "Always",
    "AnyOf",
    "Date",
    "DateProperty",
    "DayOfMonth",
    "Frequency",
    "HourOfDay",
    "InMonth",
    "MinInstant",
    "MinuteCount",
    "MinuteOfHour",
    "Month",
    "OccurrenceCount",
    "OccurrenceIndex",
    "OnMonthDay",
    "OnWeekday",
    "RangedInt",
    "Recur",
    "RepeatInterval",
    "RRuleToks",
    "WEEKDAYS",
    "Weekday",
    "Year",
    "YearLength",
    "ZoneOffset",
    "from_weekdays",
]
