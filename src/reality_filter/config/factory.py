"""Factory functions to create components from configuration."""

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from pathlib import Path

import redis.asyncio as redis
from pymongo import AsyncMongoClient
from sqlalchemy import URL

from reality_filter.analytics.base import AnalyticsStore
from reality_filter.analytics.memory import InMemoryAnalyticsStore
from reality_filter.analytics.sql import SQLAnalyticsStore, init_engine
from reality_filter.analyzer.base import ContentAnalyzer
from reality_filter.analyzer.claude import ClaudeContentAnalyzer
from reality_filter.analyzer.noop import NoOpContentAnalyzer
from reality_filter.cache.base import ArticleCache
from reality_filter.cache.memory import InMemoryArticleCache
from reality_filter.cache.redis import RedisArticleCache
from reality_filter.config.models import (
    AnalyticsConfig,
    AnalyticsPublisherConfig,
    CacheConfig,
    ClaudeContentAnalyzerConfig,
    ClaudeFactCheckerConfig,
    ContentAnalyzerConfig,
    FactCheckerConfig,
    LoggingPublisherConfig,
    MemoryAnalyticsConfig,
    MemoryCacheConfig,
    MemoryRepositoryConfig,
    MongoRepositoryConfig,
    NoOpContentAnalyzerConfig,
    NoOpFactCheckerConfig,
    PostgresConfig,
    PublisherConfig,
    RealityFilterConfig,
    RedisCacheConfig,
    RedisConfig,
    RedisPublisherConfig,
    RepositoryConfig,
    SQLAnalyticsConfig,
)
from reality_filter.events.analytics import AnalyticsEventPublisher
from reality_filter.events.base import EventPublisher
from reality_filter.events.composite import CompositeEventPublisher
from reality_filter.events.log import LoggingEventPublisher
from reality_filter.events.redis import RedisEventPublisher
from reality_filter.factcheck.base import FactChecker
from reality_filter.factcheck.claude import ClaudeFactChecker
from reality_filter.factcheck.noop import NoOpFactChecker
from reality_filter.repository.base import ArticleRepository
from reality_filter.repository.memory import InMemoryArticleRepository
from reality_filter.repository.mongo import MongoArticleRepository
from reality_filter.service.analytics import AnalyticsService
from reality_filter.service.analyzer import ArticleAnalyzerService

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Everything the HTTP layer needs, plus the clients to close on shutdown."""

    analyzer: ArticleAnalyzerService
    analytics: AnalyticsService
    startup_hooks: list[Callable[[], Awaitable[None]]] = field(default_factory=list)
    closers: list[Callable[[], object]] = field(default_factory=list)

    async def startup(self) -> None:
        for hook in self.startup_hooks:
            await hook()

    async def aclose(self) -> None:
        """Close every client, logging (not raising) individual failures."""
        for close in reversed(self.closers):
            try:
                result = close()
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.warning(f"Error while closing {close}: {e}")


class _Clients:
    """Lazily created shared connections."""

    def __init__(self, config: RealityFilterConfig) -> None:
        self._config = config
        self.mongo: AsyncMongoClient | None = None
        self.redis: redis.Redis | None = None
        self.closers: list[Callable[[], object]] = []

    def get_mongo(self) -> AsyncMongoClient:
        if self.mongo is None:
            self.mongo = AsyncMongoClient(self._config.mongodb.uri, tz_aware=True)
            self.closers.append(self.mongo.close)
        return self.mongo

    def get_redis(self) -> redis.Redis:
        if self.redis is None:
            self.redis = create_redis_client(self._config.redis)
            self.closers.append(self.redis.aclose)
        return self.redis


def create_redis_client(config: RedisConfig) -> redis.Redis:
    return redis.Redis(
        host=config.host,
        port=config.port,
        password=config.password or None,
        db=config.db,
        decode_responses=True,
    )


def postgres_url(config: PostgresConfig) -> URL:
    """Build a SQLAlchemy URL (psycopg driver) from postgres settings."""
    return URL.create(
        "postgresql+psycopg",
        username=config.user,
        password=config.password,
        host=config.host,
        port=config.port,
        database=config.dbname,
        query={"sslmode": config.sslmode},
    )


def create_content_analyzer(config: ContentAnalyzerConfig) -> ContentAnalyzer:
    """Create a content analyzer from config.

    Uses explicit type matching rather than getattr.
    """
    if isinstance(config, NoOpContentAnalyzerConfig):
        return NoOpContentAnalyzer(default_language=config.default_language)
    if isinstance(config, ClaudeContentAnalyzerConfig):
        return ClaudeContentAnalyzer(model=config.model, max_chars=config.max_chars)
    msg = f"Unknown content analyzer config type: {type(config)}"
    raise ValueError(msg)


def create_fact_checker(config: FactCheckerConfig) -> FactChecker:
    """Create a fact checker from config."""
    if isinstance(config, NoOpFactCheckerConfig):
        return NoOpFactChecker(reputation=config.reputation)
    if isinstance(config, ClaudeFactCheckerConfig):
        return ClaudeFactChecker(
            model=config.model,
            reputations=dict(config.reputations),
            default_reputation=config.default_reputation,
        )
    msg = f"Unknown fact checker config type: {type(config)}"
    raise ValueError(msg)


def create_analytics_store(
    config: AnalyticsConfig,
    postgres: PostgresConfig,
    closers: list[Callable[[], object]] | None = None,
) -> AnalyticsStore:
    """Create an analytics store from config."""
    if isinstance(config, SQLAnalyticsConfig):
        engine = init_engine(config.url or postgres_url(postgres))
        store = SQLAnalyticsStore(engine)
        if closers is not None:
            closers.append(store.close)
        return store
    if isinstance(config, MemoryAnalyticsConfig):
        return InMemoryAnalyticsStore()
    msg = f"Unknown analytics config type: {type(config)}"
    raise ValueError(msg)


def _create_repository(
    config: RepositoryConfig,
    clients: _Clients,
    database: str,
    hooks: list[Callable[[], Awaitable[None]]],
) -> ArticleRepository:
    if isinstance(config, MongoRepositoryConfig):
        repository = MongoArticleRepository.from_client(clients.get_mongo(), database)
        if config.ensure_indexes:
            hooks.append(repository.ensure_indexes)
        return repository
    if isinstance(config, MemoryRepositoryConfig):
        return InMemoryArticleRepository()
    msg = f"Unknown repository config type: {type(config)}"
    raise ValueError(msg)


def _create_cache(config: CacheConfig, clients: _Clients) -> ArticleCache:
    if isinstance(config, RedisCacheConfig):
        return RedisArticleCache(clients.get_redis(), ttl_seconds=config.ttl_seconds)
    if isinstance(config, MemoryCacheConfig):
        return InMemoryArticleCache(ttl_seconds=config.ttl_seconds, max_size=config.max_size)
    msg = f"Unknown cache config type: {type(config)}"
    raise ValueError(msg)


def _create_publisher(
    config: PublisherConfig, clients: _Clients, store: AnalyticsStore
) -> EventPublisher:
    if isinstance(config, LoggingPublisherConfig):
        return LoggingEventPublisher()
    if isinstance(config, RedisPublisherConfig):
        return RedisEventPublisher(clients.get_redis(), channel_prefix=config.channel_prefix)
    if isinstance(config, AnalyticsPublisherConfig):
        return AnalyticsEventPublisher(store)
    msg = f"Unknown event publisher config type: {type(config)}"
    raise ValueError(msg)


def create_from_config(
    config: RealityFilterConfig,
    *,
    run_log_override: bool | None = None,
) -> Services:
    """Create the application services from root config.

    Connections are created only for the backends the config selects.

    Args:
        config: Root configuration.
        run_log_override: Override the config's logging.run_log.enabled setting.

    Returns:
        Services with their startup hooks and closers.
    """
    clients = _Clients(config)
    hooks: list[Callable[[], Awaitable[None]]] = []
    closers: list[Callable[[], object]] = []

    store = create_analytics_store(config.analytics, config.postgres, closers)
    repository = _create_repository(config.repository, clients, config.mongodb.database, hooks)
    cache = _create_cache(config.cache, clients)
    publishers = [_create_publisher(p, clients, store) for p in config.event_publishers]
    publisher: EventPublisher = (
        publishers[0] if len(publishers) == 1 else CompositeEventPublisher(publishers)
    )

    run_log = config.logging.run_log
    run_log_enabled = run_log_override if run_log_override is not None else run_log.enabled

    analyzer = ArticleAnalyzerService(
        repository=repository,
        cache=cache,
        fact_checker=create_fact_checker(config.fact_checker),
        content_analyzer=create_content_analyzer(config.content_analyzer),
        event_publisher=publisher,
        run_log_dir=Path(run_log.log_dir) if run_log_enabled else None,
    )
    logger.info(
        f"Configured repository={config.repository.type} cache={config.cache.type} "
        f"analyzer={config.content_analyzer.type} fact_checker={config.fact_checker.type} "
        f"analytics={config.analytics.type}"
    )
    return Services(
        analyzer=analyzer,
        analytics=AnalyticsService(store),
        startup_hooks=hooks,
        closers=closers + clients.closers,
    )
