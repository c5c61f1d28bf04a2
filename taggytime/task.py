"""Library for tasks and their impact on the available time before a deadline.

A `Task` has a due instant, a workload in minutes and a completion
percentage. Its impact against a set of calendar events is the share of the
free time between now and the deadline that the remaining work would take:

    impact = remaining workload / (time until due - time occupied by events)

When the remaining work no longer fits in the free time, the impact is
reported as expired rather than as a percentage above 100%.
"""

from __future__ import annotations

import decimal
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .event import CalendarEvent
from .exceptions import RangedIntOverflowError
from .recurrence import total_overlap
from .timespan import MinInterval
from .types.instant import MinInstant
from .types.ranged import RangedInt

__all__ = ["Percent", "Workload", "Task", "ExpirableImpact", "task_impact"]

_LOGGER = logging.getLogger(__name__)

# A workload must stay below 1000 hours.
MAX_WORKLOAD = 59_999
PERCENT_MAX = 0xFFFF
ONE_HUNDRED = 100


def _round_half_up(value: decimal.Decimal) -> int:
    return int(value.to_integral_value(rounding=decimal.ROUND_HALF_UP))


class Percent(RangedInt, lower=0, upper=PERCENT_MAX):
    """A whole percentage, which may exceed 100%."""

    @classmethod
    def one(cls) -> Percent:
        """Return 100%."""
        return cls(ONE_HUNDRED)

    @property
    def is_overflow(self) -> bool:
        """Return True if the percentage is above 100%."""
        return self > ONE_HUNDRED

    def complement(self) -> Percent:
        """Return 100% minus this percentage."""
        if self.is_overflow:
            raise RangedIntOverflowError(int(self), 0, ONE_HUNDRED)
        return Percent(ONE_HUNDRED - int(self))

    @classmethod
    def from_ratio(cls, value: float | decimal.Decimal | str) -> Percent:
        """Return the percentage for a ratio where 1.0 is 100%, rounded half up."""
        try:
            ratio = decimal.Decimal(value)
        except decimal.InvalidOperation as err:
            raise ValueError(f"Unable to parse percentage: {value}") from err
        return cls(_round_half_up(ratio * ONE_HUNDRED))

    @classmethod
    def parse(cls, value: str) -> Percent:
        """Parse '45%' or a ratio such as '0.45'."""
        value = value.strip()
        if not value.endswith("%"):
            return cls.from_ratio(value)
        try:
            ratio = decimal.Decimal(value[:-1].strip()) / ONE_HUNDRED
        except decimal.InvalidOperation as err:
            raise ValueError(f"Unable to parse percentage: {value}") from err
        return cls.from_ratio(ratio)

    def __add__(self, other: object) -> Percent:
        if not isinstance(other, int):
            return NotImplemented
        return Percent(int(self) + int(other))

    def __sub__(self, other: object) -> Percent:
        if not isinstance(other, int):
            return NotImplemented
        return Percent(int(self) - int(other))

    def __str__(self) -> str:
        return f"{int(self)}%"


class Workload(RangedInt, lower=0, upper=MAX_WORKLOAD):
    """The number of minutes needed to complete a task."""

    def multiply_percent(self, percent: Percent) -> Workload:
        """Return the share of this workload, rounded to the nearest minute."""
        product = int(self) * int(percent)
        minutes, remainder = divmod(product, ONE_HUNDRED)
        if remainder >= ONE_HUNDRED // 2:
            minutes += 1
        return Workload(minutes)

    def num_min(self) -> int:
        """Return the workload in minutes."""
        return int(self)


class Task(BaseModel):
    """A piece of work with a deadline."""

    model_config = ConfigDict(validate_assignment=True)

    due: MinInstant
    length: Workload
    completion: Percent = Percent(0)

    def remaining_workload(self) -> Workload:
        """Return the minutes of work left, given the completion."""
        return self.length.multiply_percent(self.completion.complement())

    def set_progress(self, progress: Percent) -> None:
        """Set the completion, limited to 100%."""
        self.completion = min(progress, Percent.one())


@dataclass(frozen=True)
class ExpirableImpact:
    """A task impact, or None when the task can no longer be completed in time."""

    percent: Optional[Percent] = None

    @classmethod
    def from_minutes(cls, needed: int, available: int) -> ExpirableImpact:
        """Return the impact of needing some minutes out of the available ones."""
        if available <= 0 or needed > available:
            return cls(None)
        # Round half up, in integer arithmetic.
        return cls(Percent((needed * 2 * ONE_HUNDRED + available) // (2 * available)))

    @property
    def expired(self) -> bool:
        """Return True if the remaining work does not fit before the deadline."""
        return self.percent is None

    def sort_key(self) -> tuple[int, int]:
        """Return a key that orders expired impacts above every percentage."""
        if self.percent is None:
            return (1, 0)
        return (0, int(self.percent))

    def __str__(self) -> str:
        if self.percent is None:
            return "EXPIRED"
        return str(self.percent)


def task_impact(
    events: Iterable[CalendarEvent], task: Task, now: MinInstant | None = None
) -> ExpirableImpact:
    """Return the impact of a task given the events before its deadline."""
    if now is None:
        window = MinInterval.from_now_till(task.due)
    else:
        window = MinInterval(now, task.due)
    occupied = total_overlap((event.recurrence for event in events), window)
    available = window.num_min() - occupied
    needed = task.remaining_workload().num_min()
    _LOGGER.debug(
        "Task due %s needs %d of %d available minutes", task.due, needed, available
    )
    return ExpirableImpact.from_minutes(needed, available)
