"""The Calendar component."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .event import CalendarEvent, Vevent
from .recurrence import total_overlap
from .timespan import MinInterval

__all__ = ["ICalendar"]


class ICalendar(BaseModel):
    """The events read from a single VCALENDAR block."""

    model_config = ConfigDict(frozen=True)

    name: str = ""

    events: list[Vevent] = Field(default_factory=list)
    """Events associated with this calendar, in file order."""

    def calendar_events(self) -> list[CalendarEvent]:
        """Return every event in its expandable form."""
        return [event.as_calendar_event() for event in self.events]

    def overlap(self, window: MinInterval) -> int:
        """Return the total minutes that all events occupy within the window."""
        return total_overlap((event.as_recurrence() for event in self.events), window)
