"""Library for iterators used in taggytime.

A recurrence is an immutable value, so walking its occurrences needs a
separate cursor that remembers how far it has gone. Each cursor starts over
from the occurrence it was created from, which makes a recurrence restartable
simply by iterating it again.

The cursor is lazy: the next occurrence is only computed when it is
requested, so a caller that stops early never pays for (or fails on)
occurrences it did not ask for.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .recurrence import Recurrence

__all__ = ["RecurrenceIterator"]


class RecurrenceIterator(Iterator["Recurrence"]):
    """A forward-only cursor over the occurrences of a recurrence."""

    def __init__(self, first: Recurrence) -> None:
        """Initialize RecurrenceIterator."""
        self._first = first
        self._current: Optional[Recurrence] = None
        self._done = False

    def __iter__(self) -> RecurrenceIterator:
        return self

    def __next__(self) -> Recurrence:
        """Return the next occurrence."""
        if self._done:
            raise StopIteration
        if self._current is None:
            self._current = self._first
            return self._current
        if (following := self._current.advance()) is None:
            self._done = True
            raise StopIteration
        self._current = following
        return following
