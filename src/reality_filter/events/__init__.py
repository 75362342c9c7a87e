from reality_filter.events.analytics import AnalyticsEventPublisher
from reality_filter.events.base import (
    ARTICLE_ANALYZED,
    ARTICLE_FLAGGED,
    EventPublisher,
    event_payload,
)
from reality_filter.events.composite import CompositeEventPublisher
from reality_filter.events.log import LoggingEventPublisher
from reality_filter.events.redis import RedisEventPublisher

__all__ = [
    "ARTICLE_ANALYZED",
    "ARTICLE_FLAGGED",
    "AnalyticsEventPublisher",
    "CompositeEventPublisher",
    "EventPublisher",
    "LoggingEventPublisher",
    "RedisEventPublisher",
    "event_payload",
]
