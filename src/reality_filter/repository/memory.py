"""In-memory article repository for development and tests."""

import copy

from reality_filter.data import Article, ArticleStatus, utc_now
from reality_filter.errors import ArticleNotFoundError


class InMemoryArticleRepository:
    """Keep articles in a dict, copying on every read and write.

    Copies keep callers from mutating stored state, matching the
    whole-document semantics of the MongoDB repository.
    """

    def __init__(self) -> None:
        self._articles: dict[str, Article] = {}

    async def save(self, article: Article) -> None:
        article.updated_at = utc_now()
        existing = self._articles.get(article.id)
        stored = copy.deepcopy(article)
        if existing is not None:
            stored.created_at = existing.created_at
        self._articles[article.id] = stored

    async def find_by_id(self, article_id: str) -> Article | None:
        article = self._articles.get(article_id)
        return copy.deepcopy(article) if article is not None else None

    async def find_flagged(self, limit: int, offset: int) -> list[Article]:
        flagged = [a for a in self._articles.values() if a.status == ArticleStatus.FLAGGED]
        flagged.sort(key=lambda a: a.updated_at, reverse=True)
        return [copy.deepcopy(a) for a in flagged[offset : offset + limit]]

    async def update(self, article: Article) -> None:
        if article.id not in self._articles:
            raise ArticleNotFoundError(article.id)
        article.updated_at = utc_now()
        self._articles[article.id] = copy.deepcopy(article)

    def __len__(self) -> int:
        return len(self._articles)
