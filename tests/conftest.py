"""Test fixtures."""

from collections.abc import Callable

import pytest

from taggytime.types import Date, MinInstant

InstantFactory = Callable[..., MinInstant]


@pytest.fixture(name="at")
def mock_instant_factory() -> InstantFactory:
    """Fixture that creates instants from plain integers, in UTC by default."""

    def func(
        year: int, month: int, day: int, hour: int = 0, minute: int = 0, offset: int = 0
    ) -> MinInstant:
        return MinInstant.from_date(Date.of(year, month, day, hour, minute, offset))

    return func
