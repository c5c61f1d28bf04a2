"""The entry point for reading calendars from ics content.

This is an example of parsing an ics file into events that can be measured
against a window of time:

```python
from pathlib import Path
from taggytime.calendar_stream import IcsCalendarStream
from taggytime.types import ZoneOffset

filename = Path("example/calendar.ics")
with filename.open() as ics_file:
    calendar = IcsCalendarStream.from_ics(ics_file.read(), ZoneOffset(-240))
    print("File contains %s event(s)", len(calendar.events))
```

`load_calendar` does the same for a path, and returns the events in their
expandable form.
"""

from __future__ import annotations

import logging
import pathlib

from .calendar import ICalendar
from .event import CalendarEvent
from .exceptions import FileExtensionError
from .parsing.parser import parse_calendar
from .types.utc_offset import ZoneOffset

__all__ = ["IcsCalendarStream", "load_calendar"]

_LOGGER = logging.getLogger(__name__)

ICS_SUFFIX = ".ics"
BYTE_ORDER_MARK = "\ufeff"


class IcsCalendarStream:
    """A calendar stream that supports parsing ICS."""

    @classmethod
    def from_ics(
        cls, content: str, default_offset: ZoneOffset, name: str = ""
    ) -> ICalendar:
        """Factory method to create a new calendar from iCalendar content.

        Will raise a CalendarParseError on failure.
        """
        return parse_calendar(
            content.removeprefix(BYTE_ORDER_MARK), default_offset, name
        )


def load_calendar(
    path: str | pathlib.Path, default_offset: ZoneOffset
) -> list[CalendarEvent]:
    """Read an ics file and return its events."""
    path = pathlib.Path(path)
    if path.suffix.lower() != ICS_SUFFIX:
        raise FileExtensionError(path)
    _LOGGER.debug("Loading calendar from %s", path)
    calendar = IcsCalendarStream.from_ics(
        path.read_text(encoding="utf-8-sig"), default_offset, path.stem
    )
    return calendar.calendar_events()
