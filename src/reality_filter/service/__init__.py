from reality_filter.service.analytics import AnalyticsService, parse_time_range
from reality_filter.service.analyzer import ArticleAnalyzerService
from reality_filter.service.base import AnalyticsProvider, ArticleAnalyzer, ArticleManager

__all__ = [
    "AnalyticsProvider",
    "AnalyticsService",
    "ArticleAnalyzer",
    "ArticleAnalyzerService",
    "ArticleManager",
    "parse_time_range",
]
