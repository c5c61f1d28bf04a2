"""Library for managing the named calendars and tasks of a user.

A `CalendarStore` is the persisted environment: the UTC offset that times are
read and displayed in, calendars of events keyed by a unique name, and tasks
keyed by a unique name. It answers the question the rest of the library is
built for, which tasks are most affected by the time that events occupy:

```python
store = CalendarStore.load()
store.load_calendar("school", "~/Downloads/school.ics")
store.add_task("essay", Task(due=due, length=Workload(600)))
for name, task, impact in store.impacts():
    print(name, impact)
store.save()
```
"""

from __future__ import annotations

import logging
import pathlib
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .calendar_stream import load_calendar
from .event import CalendarEvent
from .exceptions import (
    NameExistsError,
    NameNotFoundError,
    StoreError,
)
from .recurrence import total_overlap
from .task import ExpirableImpact, Percent, Task, task_impact
from .timespan import MinInterval
from .types.instant import MinInstant
from .types.utc_offset import ZoneOffset
from .util import default_store_path

__all__ = ["CalendarStore"]

_LOGGER = logging.getLogger(__name__)


def _unique_insert(contents: dict, name: str, value: object) -> None:
    if name in contents:
        raise NameExistsError(f"Name `{name}` is already in use")
    contents[name] = value


def _remove(contents: dict, name: str) -> None:
    if name not in contents:
        raise NameNotFoundError(f"There is no `{name}`")
    del contents[name]


def _rename(contents: dict, name: str, new_name: str) -> None:
    if name not in contents:
        raise NameNotFoundError(f"There is no `{name}`")
    if new_name in contents:
        raise NameExistsError(f"Name `{new_name}` is already in use")
    contents[new_name] = contents.pop(name)


class CalendarStore(BaseModel):
    """Named calendars and tasks, and the offset they are displayed in."""

    model_config = ConfigDict(validate_assignment=True)

    timezone: ZoneOffset = ZoneOffset(0)

    calendars: dict[str, list[CalendarEvent]] = Field(default_factory=dict)
    """Events of each calendar, keyed by calendar name."""

    tasks: dict[str, Task] = Field(default_factory=dict)
    """Tasks keyed by task name."""

    def add_calendar(self, name: str, events: Iterable[CalendarEvent]) -> None:
        """Add a calendar under a new name."""
        _unique_insert(self.calendars, name, list(events))
        _LOGGER.debug("Added calendar `%s`", name)

    def load_calendar(self, name: str, path: str | pathlib.Path) -> None:
        """Read an ics file and add it as a calendar under a new name."""
        if name in self.calendars:
            raise NameExistsError(f"Name `{name}` is already in use")
        self.add_calendar(
            name, load_calendar(pathlib.Path(path).expanduser(), self.timezone)
        )

    def remove_calendar(self, name: str) -> None:
        """Remove the calendar with the specified name."""
        _remove(self.calendars, name)
        _LOGGER.debug("Removed calendar `%s`", name)

    def rename_calendar(self, name: str, new_name: str) -> None:
        """Move a calendar to a new name."""
        _rename(self.calendars, name, new_name)

    def add_task(self, name: str, task: Task) -> None:
        """Add a task under a new name."""
        _unique_insert(self.tasks, name, task)
        _LOGGER.debug("Added task `%s` due %s", name, task.due)

    def remove_task(self, name: str) -> None:
        """Remove the task with the specified name."""
        _remove(self.tasks, name)
        _LOGGER.debug("Removed task `%s`", name)

    def rename_task(self, name: str, new_name: str) -> None:
        """Move a task to a new name."""
        _rename(self.tasks, name, new_name)

    def set_progress(self, name: str, progress: Percent) -> None:
        """Set the completion of a task, limited to 100%."""
        if (task := self.tasks.get(name)) is None:
            raise NameNotFoundError(f"There is no `{name}`")
        task.set_progress(progress)

    def set_timezone(self, offset: ZoneOffset) -> None:
        """Set the offset that new calendars and tasks are read in."""
        self.timezone = offset

    def events(self) -> list[CalendarEvent]:
        """Return the events of every calendar."""
        return [event for events in self.calendars.values() for event in events]

    def overlap(self, window: MinInterval) -> int:
        """Return the minutes that all events occupy within the window."""
        return total_overlap((event.recurrence for event in self.events()), window)

    def impact(self, task: Task, now: MinInstant | None = None) -> ExpirableImpact:
        """Return the impact of a task given all of the events."""
        return task_impact(self.events(), task, now)

    def impacts(
        self, now: MinInstant | None = None
    ) -> list[tuple[str, Task, ExpirableImpact]]:
        """Return every task with its impact, the most affected first."""
        if now is None:
            now = MinInstant.now(self.timezone)
        result = [
            (name, task, self.impact(task, now)) for name, task in self.tasks.items()
        ]
        result.sort(key=lambda item: item[0])
        result.sort(key=lambda item: item[2].sort_key(), reverse=True)
        return result

    def total_impact(self, now: MinInstant | None = None) -> Percent:
        """Return the sum of the impacts of the tasks that have not expired."""
        total = Percent(0)
        for _, _, impact in self.impacts(now):
            if impact.percent is not None:
                total = total + impact.percent
        return total

    def truncate(self, now: MinInstant | None = None) -> int:
        """Drop the events that have ended, returning how many were dropped."""
        if now is None:
            now = MinInstant.now(self.timezone)
        removed = 0
        for name, events in self.calendars.items():
            remaining = [event for event in events if not event.ended(now)]
            removed += len(events) - len(remaining)
            self.calendars[name] = remaining
        _LOGGER.debug("Truncated %d ended events", removed)
        return removed

    @classmethod
    def load(cls, path: pathlib.Path | None = None) -> CalendarStore:
        """Read a store from a json file, or return an empty store if it is missing."""
        if path is None:
            path = default_store_path()
        if not path.exists():
            _LOGGER.debug("No store found at %s", path)
            return cls()
        try:
            return cls.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as err:
            raise StoreError(f"Unable to read store from {path}: {err}") from err

    def save(self, path: pathlib.Path | None = None) -> None:
        """Write the store to a json file, creating its directory if needed."""
        if path is None:
            path = default_store_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        _LOGGER.debug("Saved store to %s", path)
