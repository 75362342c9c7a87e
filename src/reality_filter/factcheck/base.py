from typing import Protocol

from reality_filter.data import Article, Flag


class FactChecker(Protocol):
    """Interface for external fact-checking services."""

    async def check_facts(self, article: Article) -> list[Flag]:
        """Verify the claims made in an article.

        Args:
            article: Article to check.

        Returns:
            Flags for each problem found (empty if none).
        """
        ...

    async def get_source_reputation(self, source: str) -> float:
        """Return the reputation of a news source in [0, 1]."""
        ...
