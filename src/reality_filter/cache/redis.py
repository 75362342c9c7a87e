"""Redis article cache."""

import json
import logging

import redis.asyncio as redis

from reality_filter.cache.base import DEFAULT_TTL_SECONDS, cache_key
from reality_filter.data import Article, article_from_dict, article_to_dict

logger = logging.getLogger(__name__)


class RedisArticleCache:
    """Cache whole articles as JSON strings with a TTL.

    Args:
        client: redis.asyncio client.
        ttl_seconds: Expiry applied on every ``set``.
    """

    def __init__(self, client: redis.Redis, ttl_seconds: int = DEFAULT_TTL_SECONDS) -> None:
        self._client = client
        self._ttl = ttl_seconds

    async def set(self, article: Article) -> None:
        payload = json.dumps(article_to_dict(article, json_safe=True))
        await self._client.set(cache_key(article.id), payload, ex=self._ttl)

    async def get(self, article_id: str) -> Article | None:
        payload = await self._client.get(cache_key(article_id))
        if payload is None:
            return None
        return article_from_dict(json.loads(payload))

    async def delete(self, article_id: str) -> None:
        await self._client.delete(cache_key(article_id))

    async def close(self) -> None:
        await self._client.aclose()
