"""Library for integers that are constrained to a fixed range.

A `RangedInt` behaves exactly like an `int`, except that a value outside of
its bounds can never be constructed. This pushes validation to a single
construction site so that a "minute 61" or "zero repetitions" can never be
observed downstream.

Concrete ranges are declared with class keywords:

```python
class MinuteOfHour(RangedInt, lower=0, upper=59):
    ...

MinuteOfHour(59)  # ok
MinuteOfHour(60)  # raises RangedIntOverflowError
```

Ranged integers can be used directly as pydantic field types.
"""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from ..exceptions import RangedIntOverflowError, RangedIntUnderflowError
from .const import MINUTE_LOWERBOUND, MINUTE_UPPERBOUND

__all__ = [
    "RangedInt",
    "MinuteOfHour",
    "HourOfDay",
    "DayOfMonth",
    "OccurrenceIndex",
    "OccurrenceCount",
    "RepeatInterval",
    "MinuteCount",
]

_T = TypeVar("_T", bound="RangedInt")

# Bound used for ranges that are only limited by the backing integer width.
I64_MAX = 2**63 - 1


class RangedInt(int):
    """An integer constrained to the inclusive range [MIN, MAX]."""

    MIN: ClassVar[int] = -(2**63)
    MAX: ClassVar[int] = I64_MAX

    def __init_subclass__(
        cls, lower: int | None = None, upper: int | None = None, **kwargs: Any
    ) -> None:
        super().__init_subclass__(**kwargs)
        if lower is not None:
            cls.MIN = lower
        if upper is not None:
            cls.MAX = upper
        if cls.MIN > cls.MAX:
            raise TypeError(f"{cls.__name__} has an empty range [{cls.MIN}, {cls.MAX}]")

    def __new__(cls: type[_T], value: int) -> _T:
        """Construct a ranged integer, failing when out of bounds."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{cls.__name__} requires an int, got {value!r}")
        if value < cls.MIN:
            raise RangedIntUnderflowError(int(value), cls.MIN, cls.MAX)
        if value > cls.MAX:
            raise RangedIntOverflowError(int(value), cls.MIN, cls.MAX)
        return super().__new__(cls, value)

    def increment(self: _T) -> _T:
        """Return the next value, failing if it would leave the range."""
        return type(self)(int(self) + 1)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"

    def __str__(self) -> str:
        return str(int(self))

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Validate as an int then apply the range check."""
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.int_schema(),
            serialization=core_schema.plain_serializer_function_ser_schema(int),
        )


class MinuteOfHour(RangedInt, lower=0, upper=59):
    """Minute within an hour."""


class HourOfDay(RangedInt, lower=0, upper=23):
    """Hour within a day."""


class DayOfMonth(RangedInt, lower=1, upper=31):
    """Day within a month, before checking the length of a specific month."""


class OccurrenceIndex(RangedInt, lower=1):
    """The 1-based position of an occurrence in a recurrence."""


class OccurrenceCount(RangedInt, lower=1):
    """Number of occurrences that bound a recurrence."""


class RepeatInterval(RangedInt, lower=1):
    """Repeat every N periods of a recurrence."""


class MinuteCount(RangedInt, lower=MINUTE_LOWERBOUND, upper=MINUTE_UPPERBOUND):
    """Minutes since the epoch."""
