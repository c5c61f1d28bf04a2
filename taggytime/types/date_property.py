"""Library for composable predicates over civil dates.

A `DateProperty` is a small expression tree that decides whether a recurring
event may occur on a given date. Leaves test a single attribute of the date,
and `AnyOf` / `AllOf` combine nested properties with a logical OR / AND. The
tree mirrors the BYDAY list of a recurrence rule:

```python
prop = from_weekdays([Weekday.MONDAY, Weekday.WEDNESDAY])
prop.check(Date.of(2023, 3, 15))  # True, a Wednesday
str(prop)  # 'MO | WE'
```

Properties are frozen pydantic models tagged with a `kind` field, so they
can be compared, copied and serialized like any other value.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .date import Date
from .month import Month
from .ranged import DayOfMonth
from .weekday import Weekday

__all__ = [
    "DateProperty",
    "Always",
    "OnWeekday",
    "OnMonthDay",
    "InMonth",
    "AnyOf",
    "AllOf",
    "from_weekdays",
]


class _DatePropertyModel(BaseModel):
    """Base class for all date property nodes."""

    model_config = ConfigDict(frozen=True)

    def check(self, date: Date) -> bool:
        """Return True if the date satisfies this property."""
        raise NotImplementedError


class Always(_DatePropertyModel):
    """Matches every date."""

    kind: Literal["always"] = "always"

    def check(self, date: Date) -> bool:
        return True

    def __str__(self) -> str:
        return "always"


class OnWeekday(_DatePropertyModel):
    """Matches dates that fall on a day of the week."""

    kind: Literal["weekday"] = "weekday"
    weekday: Weekday

    def check(self, date: Date) -> bool:
        return date.weekday() == self.weekday

    def __str__(self) -> str:
        return str(self.weekday)


class OnMonthDay(_DatePropertyModel):
    """Matches dates with a day of the month, skipping months that are too short."""

    kind: Literal["month_day"] = "month_day"
    day: DayOfMonth

    def check(self, date: Date) -> bool:
        return date.day == self.day

    def __str__(self) -> str:
        return f"day {self.day}"


class InMonth(_DatePropertyModel):
    """Matches dates in a month of the year."""

    kind: Literal["month"] = "month"
    month: Month

    def check(self, date: Date) -> bool:
        return date.month == self.month

    def __str__(self) -> str:
        return self.month.label


class AnyOf(_DatePropertyModel):
    """Matches dates that satisfy at least one of the nested properties."""

    kind: Literal["any_of"] = "any_of"
    props: tuple[DateProperty, ...]

    def check(self, date: Date) -> bool:
        return any(prop.check(date) for prop in self.props)

    def __str__(self) -> str:
        return " | ".join(_nested_str(prop) for prop in self.props)


class AllOf(_DatePropertyModel):
    """Matches dates that satisfy every nested property."""

    kind: Literal["all_of"] = "all_of"
    props: tuple[DateProperty, ...]

    def check(self, date: Date) -> bool:
        return all(prop.check(date) for prop in self.props)

    def __str__(self) -> str:
        return " & ".join(_nested_str(prop) for prop in self.props)


DateProperty = Annotated[
    Union[Always, OnWeekday, OnMonthDay, InMonth, AnyOf, AllOf],
    Field(discriminator="kind"),
]

AnyOf.model_rebuild()
AllOf.model_rebuild()


def _nested_str(prop: _DatePropertyModel) -> str:
    if isinstance(prop, (AnyOf, AllOf)):
        return f"({prop})"
    return str(prop)


def from_weekdays(weekdays: Iterable[Weekday]) -> DateProperty:
    """Return a property matching any of the weekdays, in the order given."""
    props = tuple(OnWeekday(weekday=weekday) for weekday in weekdays)
    if not props:
        raise ValueError("At least one weekday is required")
    if len(props) == 1:
        return props[0]
    return AnyOf(props=props)
