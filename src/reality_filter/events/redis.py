"""Redis pub/sub event publisher."""

import json
import logging

import redis.asyncio as redis

from reality_filter.data import Article
from reality_filter.events.base import ARTICLE_ANALYZED, ARTICLE_FLAGGED, event_payload

logger = logging.getLogger(__name__)

ANALYZED_CHANNEL = "articles.analyzed"
FLAGGED_CHANNEL = "articles.flagged"


class RedisEventPublisher:
    """Publish JSON event payloads on Redis channels.

    Args:
        client: redis.asyncio client.
        channel_prefix: Prepended to the channel names, e.g. "prod." gives
            "prod.articles.analyzed".
    """

    def __init__(self, client: redis.Redis, channel_prefix: str = "") -> None:
        self._client = client
        self._prefix = channel_prefix

    async def _publish(self, channel: str, payload: dict) -> None:
        receivers = await self._client.publish(self._prefix + channel, json.dumps(payload))
        logger.debug(f"Published to {self._prefix + channel} ({receivers} receivers)")

    async def publish_article_analyzed(self, article: Article) -> None:
        await self._publish(ANALYZED_CHANNEL, event_payload(ARTICLE_ANALYZED, article))

    async def publish_article_flagged(self, article: Article) -> None:
        await self._publish(FLAGGED_CHANNEL, event_payload(ARTICLE_FLAGGED, article))
