"""Configuration module for Reality Filter."""

from reality_filter.config.factory import Services, create_from_config
from reality_filter.config.loader import apply_env_overrides, get_default_config_path, load_config
from reality_filter.config.models import (
    AnalyticsPublisherConfig,
    ClaudeContentAnalyzerConfig,
    ClaudeFactCheckerConfig,
    LoggingConfig,
    LoggingPublisherConfig,
    MemoryAnalyticsConfig,
    MemoryCacheConfig,
    MemoryRepositoryConfig,
    MongoDBConfig,
    MongoRepositoryConfig,
    NoOpContentAnalyzerConfig,
    NoOpFactCheckerConfig,
    PostgresConfig,
    RealityFilterConfig,
    RedisCacheConfig,
    RedisConfig,
    RedisPublisherConfig,
    RunLogConfig,
    ServerConfig,
    SQLAnalyticsConfig,
)

__all__ = [
    "AnalyticsPublisherConfig",
    "ClaudeContentAnalyzerConfig",
    "ClaudeFactCheckerConfig",
    "LoggingConfig",
    "LoggingPublisherConfig",
    "MemoryAnalyticsConfig",
    "MemoryCacheConfig",
    "MemoryRepositoryConfig",
    "MongoDBConfig",
    "MongoRepositoryConfig",
    "NoOpContentAnalyzerConfig",
    "NoOpFactCheckerConfig",
    "PostgresConfig",
    "RealityFilterConfig",
    "RedisCacheConfig",
    "RedisConfig",
    "RedisPublisherConfig",
    "RunLogConfig",
    "SQLAnalyticsConfig",
    "ServerConfig",
    "Services",
    "apply_env_overrides",
    "create_from_config",
    "get_default_config_path",
    "load_config",
]
