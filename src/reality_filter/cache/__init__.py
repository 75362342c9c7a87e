from reality_filter.cache.base import DEFAULT_TTL_SECONDS, ArticleCache, cache_key
from reality_filter.cache.memory import InMemoryArticleCache
from reality_filter.cache.redis import RedisArticleCache

__all__ = [
    "DEFAULT_TTL_SECONDS",
    "ArticleCache",
    "InMemoryArticleCache",
    "RedisArticleCache",
    "cache_key",
]
