"""Event publisher that only writes events to the log."""

import logging

from reality_filter.data import Article
from reality_filter.events.base import ARTICLE_ANALYZED, ARTICLE_FLAGGED

logger = logging.getLogger(__name__)


class LoggingEventPublisher:
    """Log each event at INFO instead of sending it anywhere."""

    async def publish_article_analyzed(self, article: Article) -> None:
        logger.info(
            f"{ARTICLE_ANALYZED}: id={article.id} status={article.status.value} "
            f"score={article.score:.3f}"
        )

    async def publish_article_flagged(self, article: Article) -> None:
        flag_types = ",".join(f.type.value for f in article.flags)
        logger.info(f"{ARTICLE_FLAGGED}: id={article.id} flags={flag_types}")
