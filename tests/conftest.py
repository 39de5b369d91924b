"""Shared fixtures."""

from datetime import date, datetime, time, timezone

import pytest

from evermind.core.assignments import Assignment


@pytest.fixture
def now():
    return datetime(2025, 3, 10, 12, 0)


@pytest.fixture
def make_assignment():
    """Factory for assignments with sensible defaults."""
    counter = {"n": 0}

    def _make(
        due_date=date(2025, 3, 10),
        due_time=time(23, 59),
        priority="medium",
        completed=False,
        title=None,
        course="ENG101",
        id=None,
    ):
        counter["n"] += 1
        n = counter["n"]
        return Assignment(
            id=id or f"a{n}",
            title=title or f"Assignment {n}",
            course=course,
            due_date=due_date,
            due_time=due_time,
            priority=priority,
            completed=completed,
            created_at=datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc),
        )

    return _make
