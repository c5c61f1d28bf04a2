"""A timespan is defined by a start and end instant and used for comparisons.

A `MinInterval` is a half-open span `[start, end)` of two instants. Spans are
allowed to be degenerate (start equals end) or even reversed, in which case
their duration is zero rather than an error. This keeps the overlap
arithmetic used for recurring events total:

```python
lecture = MinInterval(start, start.shift_minutes(80))
lecture.overlap(window)  # minutes of the lecture inside the window
```
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from .types.instant import MinInstant
from .types.utc_offset import ZoneOffset

__all__ = ["MinInterval"]


@dataclass(frozen=True)
class MinInterval:
    """An ordered pair of instants."""

    start: MinInstant
    end: MinInstant

    @classmethod
    def from_now_till(cls, end: MinInstant) -> MinInterval:
        """Return the interval from the current minute until the end."""
        return cls(MinInstant.now(end.offset), end)

    def num_min(self) -> int:
        """Return the length of the interval in minutes, or zero if reversed."""
        return max(0, int(self.end.raw) - int(self.start.raw))

    def intersect(self, other: MinInterval) -> MinInterval:
        """Return the shared part of both intervals, possibly degenerate."""
        return MinInterval(max(self.start, other.start), min(self.end, other.end))

    def overlap(self, other: MinInterval) -> int:
        """Return the number of minutes shared by both intervals."""
        return self.intersect(other).num_min()

    def shift_days(self, days: int) -> MinInterval:
        """Return the interval moved by a signed number of whole days."""
        return replace(
            self, start=self.start.shift_days(days), end=self.end.shift_days(days)
        )

    def next_day(self) -> MinInterval:
        """Return the interval moved one day later."""
        return self.shift_days(1)

    def starts_within(self, other: MinInterval) -> bool:
        """Return True if this interval starts while the other interval is active."""
        return other.start <= self.start < other.end

    def intersects(self, other: MinInterval) -> bool:
        """Return True if this interval shares at least one minute with the other."""
        return self.overlap(other) > 0

    def includes(self, other: MinInterval) -> bool:
        """Return True if the other interval starts and ends within this interval."""
        return self.start <= other.start and other.end <= self.end

    def with_offset(self, offset: ZoneOffset) -> MinInterval:
        """Return the same interval displayed in a different offset."""
        return replace(
            self, start=self.start.with_offset(offset), end=self.end.with_offset(offset)
        )

    def as_date_string(self) -> str:
        """Return the interval as a human readable range."""
        return f"{self.start.as_date_string()} - {self.end.as_date_string()}"

    def __str__(self) -> str:
        return self.as_date_string()

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, MinInterval):
            return NotImplemented
        return (self.start, self.end) < (other.start, other.end)

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, MinInterval):
            return NotImplemented
        return (self.start, self.end) > (other.start, other.end)

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, MinInterval):
            return NotImplemented
        return (self.start, self.end) <= (other.start, other.end)

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, MinInterval):
            return NotImplemented
        return (self.start, self.end) >= (other.start, other.end)
