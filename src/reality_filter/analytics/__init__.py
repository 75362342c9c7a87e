from reality_filter.analytics.base import AnalyticsStore
from reality_filter.analytics.memory import InMemoryAnalyticsStore
from reality_filter.analytics.sql import SQLAnalyticsStore, init_engine

__all__ = [
    "AnalyticsStore",
    "InMemoryAnalyticsStore",
    "SQLAnalyticsStore",
    "init_engine",
]
