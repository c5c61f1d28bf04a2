"""A grouping of component properties that describe a calendar event.

A `Vevent` is what the parser reads from a `VEVENT` block: the span of the
first occurrence, an optional recurrence rule and a summary. A
`CalendarEvent` is the form used by the rest of the library, where the rule
has already been turned into a `Recurrence` that can be expanded.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .recurrence import Recurrence, as_pattern
from .timespan import MinInterval
from .types.instant import MinInstant
from .types.recur import Recur

__all__ = ["Vevent", "CalendarEvent"]


class Vevent(BaseModel):
    """A single event as read from an ics file."""

    model_config = ConfigDict(frozen=True)

    span: MinInterval
    """The start and end of the first occurrence."""

    recur: Optional[Recur] = None
    """The recurrence rule, if the event repeats."""

    summary: str = ""

    @property
    def start(self) -> MinInstant:
        """Return the start of the first occurrence."""
        return self.span.start

    @property
    def end(self) -> MinInstant:
        """Return the end of the first occurrence."""
        return self.span.end

    def as_recurrence(self) -> Recurrence:
        """Return the first occurrence of the event and its pattern."""
        return Recurrence(span=self.span, pattern=as_pattern(self.recur, self.start))

    def as_calendar_event(self) -> CalendarEvent:
        """Return the event in its expandable form."""
        return CalendarEvent(summary=self.summary, recurrence=self.as_recurrence())


class CalendarEvent(BaseModel):
    """A named recurrence."""

    model_config = ConfigDict(frozen=True)

    summary: str
    recurrence: Recurrence

    def overlap(self, window: MinInterval) -> int:
        """Return the minutes the event occupies within the window."""
        return self.recurrence.overlap(window)

    def ended(self, now: MinInstant | None = None) -> bool:
        """Return True if the event has no occurrence left after now."""
        return self.recurrence.ended(now)

    def __str__(self) -> str:
        return f"{self.summary}: {self.recurrence.span}"
