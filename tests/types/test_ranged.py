"""Tests for bounded integers."""

import pytest
from pydantic import BaseModel, ValidationError

from taggytime.exceptions import (
    RangedIntOverflowError,
    RangedIntUnderflowError,
    RefinementError,
)
from taggytime.types.ranged import (
    DayOfMonth,
    HourOfDay,
    MinuteCount,
    MinuteOfHour,
    OccurrenceCount,
    RepeatInterval,
)


@pytest.mark.parametrize(
    ("cls", "value"),
    [
        (MinuteOfHour, 0),
        (MinuteOfHour, 59),
        (HourOfDay, 23),
        (DayOfMonth, 1),
        (DayOfMonth, 31),
        (OccurrenceCount, 1),
        (RepeatInterval, 1000),
        (MinuteCount, 0x7FFFFFFF),
    ],
)
def test_boundaries(cls: type, value: int) -> None:
    """Test that values at the boundary of the range are accepted."""
    assert cls(value) == value


def test_overflow() -> None:
    """Test constructing a value above the range."""
    with pytest.raises(RangedIntOverflowError) as exc_info:
        MinuteOfHour(60)
    assert exc_info.value.value == 60
    assert exc_info.value.lower == 0
    assert exc_info.value.upper == 59
    assert str(exc_info.value) == "60 is above the range [0, 59]"


def test_underflow() -> None:
    """Test constructing a value below the range."""
    with pytest.raises(RangedIntUnderflowError) as exc_info:
        OccurrenceCount(0)
    assert exc_info.value.value == 0
    assert exc_info.value.lower == 1
    with pytest.raises(RangedIntUnderflowError):
        MinuteCount(-1)


def test_refinement_error_is_value_error() -> None:
    """Test that range errors can be handled as a ValueError."""
    with pytest.raises(ValueError):
        HourOfDay(24)
    assert issubclass(RefinementError, ValueError)


def test_increment() -> None:
    """Test incrementing up to the end of the range."""
    minute = MinuteOfHour(58).increment()
    assert minute == 59
    assert isinstance(minute, MinuteOfHour)
    with pytest.raises(RangedIntOverflowError):
        minute.increment()


def test_behaves_like_int() -> None:
    """Test that equality and ordering are those of the wrapped integer."""
    assert HourOfDay(3) == 3
    assert HourOfDay(3) == MinuteOfHour(3)
    assert HourOfDay(3) < HourOfDay(4)
    assert sorted([DayOfMonth(9), DayOfMonth(2)]) == [2, 9]
    assert HourOfDay(3) + 1 == 4
    assert str(HourOfDay(3)) == "3"
    assert repr(HourOfDay(3)) == "HourOfDay(3)"


@pytest.mark.parametrize("value", [True, 1.5, "5"])
def test_rejects_non_int(value: object) -> None:
    """Test that only integers are accepted."""
    with pytest.raises(TypeError):
        MinuteOfHour(value)  # type: ignore[arg-type]


class Clock(BaseModel):
    """Model used to test pydantic integration."""

    hour: HourOfDay
    minute: MinuteOfHour = MinuteOfHour(0)


def test_pydantic_field() -> None:
    """Test ranged integers as pydantic fields."""
    clock = Clock(hour=9, minute=30)
    assert isinstance(clock.hour, HourOfDay)
    assert clock.model_dump() == {"hour": 9, "minute": 30}
    assert Clock.model_validate_json('{"hour": 23}').hour == 23

    with pytest.raises(ValidationError):
        Clock(hour=24)
