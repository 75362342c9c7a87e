"""Shared fixtures."""

import pytest

from reality_filter.data import Article


@pytest.fixture
def article() -> Article:
    return Article.new(
        title="Council approves new budget",
        content="The city council approved the budget on Monday after a long debate.",
        source="https://www.Example-News.com/politics/budget",
        author="Jane Reporter",
        tags=["Politics", "budget"],
    )
