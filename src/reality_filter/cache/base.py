from typing import Protocol

from reality_filter.data import Article

DEFAULT_TTL_SECONDS = 3600


def cache_key(article_id: str) -> str:
    return f"article:{article_id}"


class ArticleCache(Protocol):
    """Interface for article caching."""

    async def set(self, article: Article) -> None: ...

    async def get(self, article_id: str) -> Article | None:
        """Return the cached article, or None on a miss."""
        ...

    async def delete(self, article_id: str) -> None: ...
