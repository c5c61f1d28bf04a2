"""Tests for tasks and their impact."""

from collections.abc import Callable

import pytest
from freezegun import freeze_time
from pydantic import ValidationError

from taggytime.calendar_stream import IcsCalendarStream
from taggytime.event import CalendarEvent
from taggytime.exceptions import (
    RangedIntOverflowError,
    RangedIntUnderflowError,
    TimeOverflowError,
)
from taggytime.recurrence import Recurrence
from taggytime.task import ExpirableImpact, Percent, Task, Workload, task_impact
from taggytime.timespan import MinInterval
from taggytime.types import MinInstant, MinuteCount, ZoneOffset

InstantFactory = Callable[..., MinInstant]

EST = ZoneOffset(-300)

LECTURE = """\
BEGIN:VCALENDAR
BEGIN:VEVENT
DTSTART:20230303T190000Z
DTEND:20230303T202000Z
SUMMARY:CS 101
RRULE:FREQ=WEEKLY;COUNT=12;BYDAY=MO,WE,FR
END:VEVENT
END:VCALENDAR
"""


@pytest.fixture(name="events")
def mock_events() -> list[CalendarEvent]:
    """Fixture for a Monday, Wednesday, Friday class from 14:00 to 15:20 EST."""
    return IcsCalendarStream.from_ics(LECTURE, EST).calendar_events()


@pytest.fixture(name="task")
def mock_task(at: InstantFactory) -> Task:
    """Fixture for a task due Friday morning."""
    return Task(due=at(2023, 3, 10, 9, 42, offset=-300), length=Workload(758))


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("45%", 45),
        (" 45 % ", 45),
        ("0.45", 45),
        ("1", 100),
        ("12.5%", 13),
        ("12.4%", 12),
        ("0.005", 1),
        ("0.004", 0),
        ("233.33333", 23333),
        ("150%", 150),
    ],
)
def test_percent_parse(value: str, expected: int) -> None:
    """Test parsing percentages and ratios."""
    assert Percent.parse(value) == expected


@pytest.mark.parametrize("value", ["", "abc", "%", "45%%", "-5%", "700", "ten%"])
def test_percent_parse_invalid(value: str) -> None:
    """Test values that are not percentages in range."""
    with pytest.raises(ValueError):
        Percent.parse(value)


def test_percent_complement() -> None:
    """Test the remaining share of a percentage."""
    assert Percent(45).complement() == 55
    assert Percent(100).complement() == 0
    assert Percent(0).complement() == Percent.one()
    assert not Percent(100).is_overflow
    assert Percent(101).is_overflow
    with pytest.raises(RangedIntOverflowError):
        Percent(101).complement()


def test_percent_arithmetic() -> None:
    """Test that arithmetic stays within the range."""
    total = Percent(40) + Percent(5)
    assert total == 45
    assert isinstance(total, Percent)
    assert isinstance(Percent(40) - 5, Percent)
    with pytest.raises(RangedIntOverflowError):
        Percent(0xFFFF) + 1
    with pytest.raises(RangedIntUnderflowError):
        Percent(0) - 1
    assert str(Percent(45)) == "45%"


@pytest.mark.parametrize(
    ("length", "percent", "expected"),
    [
        (758, 100, 758),
        (758, 50, 379),
        (5, 50, 3),
        (1, 49, 0),
        (0, 100, 0),
        (600, 200, 1200),
    ],
)
def test_workload_multiply_percent(length: int, percent: int, expected: int) -> None:
    """Test the share of a workload, rounded half up."""
    assert Workload(length).multiply_percent(Percent(percent)) == expected


def test_workload_bounds() -> None:
    """Test that a workload stays below 1000 hours."""
    assert Workload(59_999).num_min() == 59_999
    with pytest.raises(RangedIntOverflowError):
        Workload(60_000)
    with pytest.raises(RangedIntOverflowError):
        Workload(59_999).multiply_percent(Percent(200))


def test_remaining_workload(task: Task) -> None:
    """Test the workload left after progress is made."""
    assert task.completion == 0
    assert task.remaining_workload() == 758

    task.set_progress(Percent(25))
    assert task.completion == 25
    assert task.remaining_workload() == 569

    task.set_progress(Percent(150))
    assert task.completion == 100
    assert task.remaining_workload() == 0


def test_task_validation(task: Task) -> None:
    """Test that task fields are validated on assignment."""
    with pytest.raises(ValidationError):
        task.length = 60_000  # type: ignore[assignment]
    with pytest.raises(ValidationError):
        Task(due=task.due, length=-1)

    value = Task.model_validate_json(task.model_dump_json())
    assert value == task
    assert value.due.offset == -300


@pytest.mark.parametrize(
    ("needed", "available", "expected"),
    [
        (758, 7622, 10),
        (10, 10, 100),
        (0, 10, 0),
        (1, 200, 1),
        (1, 201, 0),
    ],
)
def test_impact_from_minutes(needed: int, available: int, expected: int) -> None:
    """Test impacts that fit in the available time."""
    impact = ExpirableImpact.from_minutes(needed, available)
    assert not impact.expired
    assert impact.percent == expected
    assert str(impact) == f"{expected}%"


@pytest.mark.parametrize(
    ("needed", "available"), [(11, 10), (10, 0), (0, 0), (0, -30)]
)
def test_impact_expired(needed: int, available: int) -> None:
    """Test work that does not fit before the deadline."""
    impact = ExpirableImpact.from_minutes(needed, available)
    assert impact.expired
    assert impact.percent is None
    assert str(impact) == "EXPIRED"


def test_impact_sort_key() -> None:
    """Test that expired impacts sort above every percentage."""
    impacts = [
        ExpirableImpact(Percent(10)),
        ExpirableImpact(),
        ExpirableImpact(Percent(0xFFFF)),
        ExpirableImpact(Percent(0)),
    ]
    ordered = sorted(impacts, key=ExpirableImpact.sort_key, reverse=True)
    assert [str(impact) for impact in ordered] == ["EXPIRED", "65535%", "10%", "0%"]


def test_task_impact(
    events: list[CalendarEvent], task: Task, at: InstantFactory
) -> None:
    """Test the impact of a task against a weekly class."""
    now = at(2023, 3, 5, 0, 0, offset=-300)
    # 7782 minutes until due, 160 of them in class.
    assert task_impact(events, task, now) == ExpirableImpact(Percent(10))
    assert task_impact([], task, now) == ExpirableImpact(Percent(10))

    task.set_progress(Percent(50))
    assert task_impact(events, task, now) == ExpirableImpact(Percent(5))


def test_task_impact_expired(
    events: list[CalendarEvent], task: Task, at: InstantFactory
) -> None:
    """Test a task that can no longer be completed."""
    assert task_impact(events, task, at(2023, 3, 10, 0, 0, offset=-300)).expired
    assert task_impact(events, task, at(2023, 3, 11)).expired


@freeze_time("2023-03-05 05:00:00")
def test_task_impact_now(events: list[CalendarEvent], task: Task) -> None:
    """Test that the window starts at the current minute by default."""
    assert task_impact(events, task) == ExpirableImpact(Percent(10))


def test_task_impact_overflow() -> None:
    """Test that busy time beyond the minute count is an error, not expired."""
    everything = MinInterval(MinInstant(MinuteCount(0)), MinInstant(MinuteCount.MAX))
    event = CalendarEvent(summary="forever", recurrence=Recurrence(span=everything))
    task = Task(due=everything.end, length=Workload(60))
    assert task_impact([event, event], task, everything.start).expired
    with pytest.raises(TimeOverflowError):
        task_impact([event, event, event], task, everything.start)
