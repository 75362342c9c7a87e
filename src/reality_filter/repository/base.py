from typing import Protocol

from reality_filter.data import Article


class ArticleRepository(Protocol):
    """Interface for article persistence."""

    async def save(self, article: Article) -> None:
        """Insert or replace an article, setting ``created_at`` if missing."""
        ...

    async def find_by_id(self, article_id: str) -> Article | None:
        """Return the article, or None if it does not exist."""
        ...

    async def find_flagged(self, limit: int, offset: int) -> list[Article]:
        """Return flagged articles, most recently updated first."""
        ...

    async def update(self, article: Article) -> None:
        """Replace an existing article.

        Raises:
            ArticleNotFoundError: If no stored article has this id.
        """
        ...
