"""Expansion of recurring events into concrete occurrences.

A `Recurrence` is the current occurrence of a repeating event: its time span,
its 1-based position in the series and the `Pattern` that produces the rest
of the series. Recurrences are immutable; `advance` returns the following
occurrence (or None when the series is over) and iterating a recurrence
walks the whole series from that point on:

```python
lecture = Recurrence(span=first_lecture, pattern=as_pattern(recur, first_lecture.start))
for occurrence in lecture:
    print(occurrence.span)
```

A pattern is either a single occurrence (`Once`) or a repeating series
(`Many`). A repeating series steps forward one day at a time from the
current occurrence until the candidate day satisfies the date predicate and
falls in a period that is a whole multiple of the interval away. The `Term`
of the series ends it after a number of occurrences or at an instant.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import RecurrenceError, TimeOverflowError
from .iter import RecurrenceIterator
from .timespan import MinInterval
from .types.const import U32_MAX
from .types.date_property import Always, DateProperty
from .types.instant import MinInstant
from .types.ranged import OccurrenceCount, OccurrenceIndex, RepeatInterval
from .types.recur import Frequency, Recur
from .types.weekday import Weekday

__all__ = [
    "Count",
    "Until",
    "Never",
    "Term",
    "Once",
    "Many",
    "Pattern",
    "Recurrence",
    "as_pattern",
    "total_overlap",
]

_LOGGER = logging.getLogger(__name__)

# Enough days to find the next Feb 29th, scaled by the interval.
MAX_SEARCH_DAYS = 366 * 8


class _RecurrenceModel(BaseModel):
    """Base class for immutable recurrence values."""

    model_config = ConfigDict(frozen=True)


class Count(_RecurrenceModel):
    """Ends a series after a number of occurrences."""

    kind: Literal["count"] = "count"
    count: OccurrenceCount


class Until(_RecurrenceModel):
    """Ends a series at an instant; an occurrence starting at it is included."""

    kind: Literal["until"] = "until"
    until: MinInstant


class Never(_RecurrenceModel):
    """A series without an end."""

    kind: Literal["never"] = "never"


Term = Annotated[Union[Count, Until, Never], Field(discriminator="kind")]


class Once(_RecurrenceModel):
    """A single occurrence."""

    kind: Literal["once"] = "once"


class Many(_RecurrenceModel):
    """A repeating series."""

    kind: Literal["many"] = "many"

    rule: DateProperty = Field(default_factory=Always)
    """The predicate that every occurrence must satisfy."""

    interval: RepeatInterval = RepeatInterval(1)
    """Only every Nth frequency period contains occurrences."""

    term: Term = Field(default_factory=Never)

    frequency: Frequency = Frequency.DAILY
    """The period that the interval counts."""

    week_start: Weekday = Weekday.MONDAY


Pattern = Annotated[Union[Once, Many], Field(discriminator="kind")]


def as_pattern(recur: Recur | None, dtstart: MinInstant) -> Pattern:
    """Return the pattern described by a recurrence rule starting at dtstart."""
    if recur is None:
        return Once()
    term: Term
    if recur.count is not None:
        term = Count(count=recur.count)
    elif recur.until is not None:
        term = Until(until=recur.until)
    else:
        term = Never()
    return Many(
        rule=recur.as_date_property(dtstart.to_date()),
        interval=recur.interval,
        term=term,
        frequency=recur.freq,
        week_start=recur.week_start,
    )


class Recurrence(_RecurrenceModel):
    """An occurrence of an event, and the pattern of the occurrences after it."""

    span: MinInterval
    index: OccurrenceIndex = OccurrenceIndex(1)
    pattern: Pattern = Field(default_factory=Once)

    @property
    def start(self) -> MinInstant:
        """Return the start of this occurrence."""
        return self.span.start

    @property
    def end(self) -> MinInstant:
        """Return the end of this occurrence."""
        return self.span.end

    def advance(self) -> Optional[Recurrence]:
        """Return the following occurrence, or None if this is the last one."""
        pattern = self.pattern
        if isinstance(pattern, Once):
            return None
        term = pattern.term
        if isinstance(term, Count) and self.index >= term.count:
            return None
        period = pattern.frequency.period(self.start.to_date(), pattern.week_start)
        candidate = self.span
        for _ in range(MAX_SEARCH_DAYS * pattern.interval):
            candidate = candidate.next_day()
            if isinstance(term, Until) and candidate.start > term.until:
                return None
            date = candidate.start.to_date()
            if not pattern.rule.check(date):
                continue
            elapsed = pattern.frequency.period(date, pattern.week_start) - period
            if elapsed % pattern.interval:
                continue
            return self.model_copy(
                update={"span": candidate, "index": self.index.increment()}
            )
        raise RecurrenceError(
            f"No occurrence of rule `{pattern.rule}` found after {self.span}"
        )

    def __iter__(self) -> Iterator[Recurrence]:  # type: ignore[override]
        """Return a cursor over this occurrence and all that follow it."""
        return RecurrenceIterator(self)

    def overlap(self, window: MinInterval) -> int:
        """Return the total minutes that the occurrences share with the window."""
        total = 0
        for occurrence in self:
            if occurrence.start >= window.end:
                break
            if occurrence.end <= window.start:
                continue
            total += occurrence.span.overlap(window)
            if total > U32_MAX:
                raise TimeOverflowError(
                    f"Overlap of {self.span} with {window} overflowed at {total}"
                )
        _LOGGER.debug("Overlap of %s with %s is %d minutes", self.span, window, total)
        return total

    def ended(self, now: MinInstant | None = None) -> bool:
        """Return True if no occurrence ends at or after now."""
        if now is None:
            now = MinInstant.now(self.start.offset)
        pattern = self.pattern
        if isinstance(pattern, Once):
            return self.end < now
        if isinstance(pattern.term, Never):
            return False
        return not any(occurrence.end >= now for occurrence in self)


def total_overlap(recurrences: Iterable[Recurrence], window: MinInterval) -> int:
    """Return the minutes that all of the recurrences share with the window."""
    total = 0
    for recurrence in recurrences:
        total += recurrence.overlap(window)
        if total > U32_MAX:
            raise TimeOverflowError(f"Overlap with {window} overflowed at {total}")
    return total
