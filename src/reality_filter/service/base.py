"""Protocols for the operations the HTTP layer drives."""

from typing import Protocol

from reality_filter.data import Article, ArticleStatus, FlagType


class ArticleAnalyzer(Protocol):
    """Interface for article analysis operations."""

    async def analyze_article(self, article: Article) -> None:
        """Run every analysis step on ``article`` and persist the result.

        Raises:
            AnalysisError: If an analysis step fails.
        """
        ...

    async def get_analysis_result(self, article_id: str) -> Article:
        """Return the analyzed article, preferring the cached copy.

        Raises:
            ArticleNotFoundError: If the article does not exist.
        """
        ...

    async def reprocess_article(self, article_id: str) -> Article:
        """Discard previous results and analyze the stored article again."""
        ...


class ArticleManager(Protocol):
    """Interface for article management operations."""

    async def create_article(self, article: Article) -> None: ...

    async def get_article(self, article_id: str) -> Article: ...

    async def update_article_status(self, article_id: str, status: ArticleStatus) -> Article: ...

    async def list_flagged_articles(self, limit: int, offset: int) -> list[Article]: ...


class AnalyticsProvider(Protocol):
    """Interface for analytics queries."""

    async def get_source_stats(self, time_range: str) -> dict[str, int]: ...

    async def get_flag_stats(self, time_range: str) -> dict[FlagType, int]: ...

    async def get_trending_topics(self, limit: int) -> list[str]: ...
