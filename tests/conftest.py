"""Shared fixtures."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from stackit.models import Question


@pytest.fixture
def questions() -> list[Question]:
    """The three questions shown on the StackIt home page."""
    return [
        Question(
            id=1,
            title="How to join 2 columns in a data set to make a separate column in SQL",
            description=(
                "I do not know the code for it as I am a beginner. As an example what I need "
                "to do is like there is a column 1 containing First name, and column 2 "
                "consists of last name I want a column to combine ..."
            ),
            tags=("sql", "database"),
            votes=12,
            answers=5,
            views=234,
            user="John Doe",
            time_ago="2 hours ago",
            created_at=datetime(2025, 7, 12, 10, 0, tzinfo=timezone.utc),
        ),
        Question(
            id=2,
            title="React useState not updating state immediately",
            description=(
                "I'm having trouble with useState hook not updating the state immediately "
                "when I call the setter function. The component doesn't re-render with the "
                "new value..."
            ),
            tags=("react", "javascript", "hooks"),
            votes=8,
            answers=3,
            views=156,
            user="Jane Smith",
            time_ago="4 hours ago",
            created_at=datetime(2025, 7, 12, 8, 0, tzinfo=timezone.utc),
        ),
        Question(
            id=3,
            title="Python list comprehension with multiple conditions",
            description=(
                "How can I create a list comprehension with multiple if conditions? "
                "I want to filter items based on multiple criteria..."
            ),
            tags=("python", "list-comprehension"),
            votes=15,
            answers=2,
            views=89,
            user="Mike Johnson",
            time_ago="1 day ago",
            created_at=datetime(2025, 7, 11, 12, 0, tzinfo=timezone.utc),
        ),
    ]
