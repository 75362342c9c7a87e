"""In-process article cache with TTL support."""

import copy
import time

from reality_filter.cache.base import DEFAULT_TTL_SECONDS, cache_key
from reality_filter.data import Article


class InMemoryArticleCache:
    """Dict-backed cache for single-process deployments and tests.

    Entries expire ``ttl_seconds`` after they are written; expired entries
    are dropped lazily on read. When ``max_size`` is reached the oldest
    tenth of the entries is evicted.

    Args:
        ttl_seconds: Lifetime of each entry. Zero or less disables expiry.
        max_size: Maximum number of cached articles.
    """

    def __init__(self, ttl_seconds: int = DEFAULT_TTL_SECONDS, max_size: int = 1000) -> None:
        self._ttl = ttl_seconds
        self._max_size = max_size
        # key -> (created_at, expires_at, article)
        self._entries: dict[str, tuple[float, float | None, Article]] = {}

    def _evict_if_needed(self) -> None:
        if len(self._entries) < self._max_size:
            return
        oldest = sorted(self._entries.items(), key=lambda item: item[1][0])
        for key, _ in oldest[: max(1, self._max_size // 10)]:
            del self._entries[key]

    async def set(self, article: Article) -> None:
        key = cache_key(article.id)
        if key not in self._entries:
            self._evict_if_needed()
        now = time.monotonic()
        expires_at = now + self._ttl if self._ttl > 0 else None
        self._entries[key] = (now, expires_at, copy.deepcopy(article))

    async def get(self, article_id: str) -> Article | None:
        key = cache_key(article_id)
        entry = self._entries.get(key)
        if entry is None:
            return None
        _, expires_at, article = entry
        if expires_at is not None and time.monotonic() > expires_at:
            del self._entries[key]
            return None
        return copy.deepcopy(article)

    async def delete(self, article_id: str) -> None:
        self._entries.pop(cache_key(article_id), None)

    def __len__(self) -> int:
        return len(self._entries)
