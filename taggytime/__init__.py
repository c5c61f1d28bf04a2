"""
taggytime measures how much of the time before a deadline is consumed by
recurring calendar commitments.

The library is built from:

  - `types`: minute resolution calendar arithmetic with bounded integers.
  - `parsing`: a lexer and recursive-descent parser for a subset of ics.
  - `recurrence`: lazy expansion of recurring events and window overlap.
  - `task` and `store`: task workloads, their impact, and a persisted
    environment of named calendars and tasks.
"""

__all__ = [
    "calendar",
    "calendar_stream",
    "compat",
    "event",
    "exceptions",
    "iter",
    "parsing",
    "recurrence",
    "store",
    "task",
    "timespan",
    "types",
    "util",
]
