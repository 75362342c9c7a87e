"""Event publisher that records events in the analytics store."""

from reality_filter.analytics.base import AnalyticsStore
from reality_filter.data import Article
from reality_filter.events.base import ARTICLE_ANALYZED, ARTICLE_FLAGGED, event_payload


class AnalyticsEventPublisher:
    """Write each event to an ``AnalyticsStore``.

    Args:
        store: Destination for the events.
    """

    def __init__(self, store: AnalyticsStore) -> None:
        self._store = store

    async def publish_article_analyzed(self, article: Article) -> None:
        await self._store.store_article_event(
            article.id, ARTICLE_ANALYZED, event_payload(ARTICLE_ANALYZED, article)
        )

    async def publish_article_flagged(self, article: Article) -> None:
        await self._store.store_article_event(
            article.id, ARTICLE_FLAGGED, event_payload(ARTICLE_FLAGGED, article)
        )
