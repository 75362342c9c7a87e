"""Fan-out event publisher."""

import logging

from reality_filter.data import Article
from reality_filter.events.base import EventPublisher

logger = logging.getLogger(__name__)


class CompositeEventPublisher:
    """Forward every event to each publisher in turn.

    All publishers are tried even if one fails; the first failure is then
    re-raised so the caller sees that delivery was incomplete.

    Args:
        publishers: Publishers to forward to, in order.
    """

    def __init__(self, publishers: list[EventPublisher]) -> None:
        self._publishers = publishers

    async def publish_article_analyzed(self, article: Article) -> None:
        first_error: Exception | None = None
        for publisher in self._publishers:
            try:
                await publisher.publish_article_analyzed(article)
            except Exception as e:
                logger.warning(f"{type(publisher).__name__} failed: {e}")
                first_error = first_error or e
        if first_error is not None:
            raise first_error

    async def publish_article_flagged(self, article: Article) -> None:
        first_error: Exception | None = None
        for publisher in self._publishers:
            try:
                await publisher.publish_article_flagged(article)
            except Exception as e:
                logger.warning(f"{type(publisher).__name__} failed: {e}")
                first_error = first_error or e
        if first_error is not None:
            raise first_error
