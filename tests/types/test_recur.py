"""Tests for recurrence rule values."""

import pytest
from pydantic import ValidationError

from taggytime.exceptions import UnsupportedRuleError
from taggytime.types import (
    AllOf,
    Always,
    Date,
    Frequency,
    InMonth,
    MinInstant,
    Month,
    OnMonthDay,
    OnWeekday,
    Recur,
    RRuleToks,
    Weekday,
    from_weekdays,
)

SATURDAY = Date.of(2023, 3, 4)
SUNDAY = Date.of(2023, 3, 5)
MONDAY = Date.of(2023, 3, 6)


def test_daily_period() -> None:
    """Test that each day is its own period."""
    assert Frequency.DAILY.period(MONDAY) - Frequency.DAILY.period(SUNDAY) == 1


def test_weekly_period() -> None:
    """Test that the week start decides where a week begins."""
    weekly = Frequency.WEEKLY
    assert weekly.period(SATURDAY) == weekly.period(SUNDAY)
    assert weekly.period(MONDAY) == weekly.period(SUNDAY) + 1

    assert weekly.period(SUNDAY, Weekday.SUNDAY) == weekly.period(
        MONDAY, Weekday.SUNDAY
    )
    assert weekly.period(SUNDAY, Weekday.SUNDAY) == (
        weekly.period(SATURDAY, Weekday.SUNDAY) + 1
    )


def test_monthly_and_yearly_period() -> None:
    """Test periods that follow the calendar."""
    assert Frequency.MONTHLY.period(Date.of(2023, 1, 31)) - Frequency.MONTHLY.period(
        Date.of(2022, 12, 1)
    ) == 1
    assert Frequency.YEARLY.period(Date.of(2023, 1, 1)) - Frequency.YEARLY.period(
        Date.of(2022, 12, 31)
    ) == 1


@pytest.mark.parametrize(
    ("freq", "expected"),
    [
        (Frequency.DAILY, Always()),
        (Frequency.WEEKLY, OnWeekday(weekday=Weekday.TUESDAY)),
        (Frequency.MONTHLY, OnMonthDay(day=14)),
        (
            Frequency.YEARLY,
            AllOf(props=(InMonth(month=Month.MAR), OnMonthDay(day=14))),
        ),
    ],
)
def test_default_date_property(freq: Frequency, expected: object) -> None:
    """Test the predicate of a rule without BYDAY."""
    assert Recur(freq=freq).as_date_property(Date.of(2023, 3, 14)) == expected


def test_byday_date_property() -> None:
    """Test that a BYDAY rule replaces the default predicate."""
    recur = Recur(
        freq=Frequency.MONTHLY,
        rules=(RRuleToks("BYDAY", ("MO", "FR")),),
    )
    assert recur.by_weekday == [Weekday.MONDAY, Weekday.FRIDAY]
    assert recur.as_date_property(Date.of(2023, 3, 14)) == from_weekdays(
        [Weekday.MONDAY, Weekday.FRIDAY]
    )


def test_unsupported_rule() -> None:
    """Test that rules other than BYDAY are not evaluated."""
    recur = Recur(freq=Frequency.YEARLY, rules=(RRuleToks("BYMONTH", ("3",)),))
    with pytest.raises(UnsupportedRuleError):
        recur.as_date_property(Date.of(2023, 3, 14))


def test_rrule_str() -> None:
    """Test encoding a rule as an RRULE value."""
    recur = Recur(
        freq=Frequency.WEEKLY,
        count=12,
        rules=(RRuleToks("BYDAY", ("MO", "WE", "FR")),),
    )
    assert recur.as_rrule_str() == "FREQ=WEEKLY;COUNT=12;BYDAY=MO,WE,FR"
    assert str(recur) == "FREQ=WEEKLY;COUNT=12;BYDAY=MO,WE,FR"

    recur = Recur(
        freq=Frequency.WEEKLY,
        interval=2,
        until=MinInstant.from_date(Date.of(2023, 3, 31, 20, 0, offset=-240)),
        rules=(RRuleToks("BYDAY", ("MO",)),),
        week_start=Weekday.SUNDAY,
    )
    assert (
        recur.as_rrule_str()
        == "FREQ=WEEKLY;INTERVAL=2;UNTIL=20230401T000000Z;BYDAY=MO;WKST=SU"
    )
    assert Recur(freq=Frequency.DAILY).as_rrule_str() == "FREQ=DAILY"


def test_validation() -> None:
    """Test that bounded fields are validated."""
    with pytest.raises(ValidationError):
        Recur(freq=Frequency.DAILY, interval=0)
    with pytest.raises(ValidationError):
        Recur(freq=Frequency.DAILY, count=0)
    with pytest.raises(ValidationError):
        Recur(freq="HOURLY")


def test_serialization() -> None:
    """Test that a rule survives a json round trip."""
    recur = Recur(
        freq=Frequency.WEEKLY,
        until=MinInstant.from_date(Date.of(2023, 4, 1, offset=-240)),
        rules=(RRuleToks("BYDAY", ("TU", "TH")),),
    )
    value = Recur.model_validate_json(recur.model_dump_json())
    assert value == recur
    assert value.until is not None
    assert value.until.offset == -240
