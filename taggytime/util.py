"""Utility methods used by multiple components."""

from __future__ import annotations

import datetime
import pathlib

__all__ = [
    "now_factory",
    "default_store_path",
]


STORE_DIR = pathlib.Path(".local") / "taggytime"
STORE_FILE = "env.json"


def now_factory() -> datetime.datetime:
    """Factory method for the current time to facilitate mocking."""
    return datetime.datetime.now(tz=datetime.timezone.utc)


def default_store_path() -> pathlib.Path:
    """Return the default location of the persisted environment."""
    return pathlib.Path.home() / STORE_DIR / STORE_FILE
