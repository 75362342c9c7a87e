"""Reality Filter: credibility scoring and flagging for news articles."""

from reality_filter.analytics import AnalyticsStore, InMemoryAnalyticsStore, SQLAnalyticsStore
from reality_filter.analyzer import ClaudeContentAnalyzer, ContentAnalyzer, NoOpContentAnalyzer
from reality_filter.cache import ArticleCache, InMemoryArticleCache, RedisArticleCache
from reality_filter.config import RealityFilterConfig, Services, create_from_config, load_config
from reality_filter.data import (
    Article,
    ArticleMetadata,
    ArticleStatus,
    Entity,
    EntityType,
    Flag,
    FlagType,
    article_from_dict,
    article_to_dict,
)
from reality_filter.errors import (
    AnalysisError,
    ArticleNotFoundError,
    InvalidRequestError,
    RealityFilterError,
)
from reality_filter.events import (
    AnalyticsEventPublisher,
    CompositeEventPublisher,
    EventPublisher,
    LoggingEventPublisher,
    RedisEventPublisher,
)
from reality_filter.factcheck import ClaudeFactChecker, FactChecker, NoOpFactChecker
from reality_filter.repository import (
    ArticleRepository,
    InMemoryArticleRepository,
    MongoArticleRepository,
)
from reality_filter.run_logger import RunLogger
from reality_filter.scoring import calculate_credibility_score
from reality_filter.service import (
    AnalyticsProvider,
    AnalyticsService,
    ArticleAnalyzer,
    ArticleAnalyzerService,
    ArticleManager,
)
from reality_filter.url import extract_domain

__all__ = [
    # Models
    "Article",
    "ArticleMetadata",
    "ArticleStatus",
    "Entity",
    "EntityType",
    "Flag",
    "FlagType",
    "article_from_dict",
    "article_to_dict",
    # Errors
    "AnalysisError",
    "ArticleNotFoundError",
    "InvalidRequestError",
    "RealityFilterError",
    # Functions
    "calculate_credibility_score",
    "extract_domain",
    # Ports
    "AnalyticsStore",
    "ArticleCache",
    "ArticleRepository",
    "ContentAnalyzer",
    "EventPublisher",
    "FactChecker",
    "AnalyticsProvider",
    "ArticleAnalyzer",
    "ArticleManager",
    # Analyzers
    "ClaudeContentAnalyzer",
    "NoOpContentAnalyzer",
    # Fact checkers
    "ClaudeFactChecker",
    "NoOpFactChecker",
    # Storage
    "InMemoryAnalyticsStore",
    "InMemoryArticleCache",
    "InMemoryArticleRepository",
    "MongoArticleRepository",
    "RedisArticleCache",
    "SQLAnalyticsStore",
    # Events
    "AnalyticsEventPublisher",
    "CompositeEventPublisher",
    "LoggingEventPublisher",
    "RedisEventPublisher",
    # Services
    "AnalyticsService",
    "ArticleAnalyzerService",
    # Logging
    "RunLogger",
    # Config
    "RealityFilterConfig",
    "Services",
    "create_from_config",
    "load_config",
]
