from typing import Any, Protocol

from reality_filter.data import Article, utc_now

ARTICLE_ANALYZED = "article_analyzed"
ARTICLE_FLAGGED = "article_flagged"


class EventPublisher(Protocol):
    """Interface for publishing article lifecycle events."""

    async def publish_article_analyzed(self, article: Article) -> None: ...

    async def publish_article_flagged(self, article: Article) -> None: ...


def event_payload(event_type: str, article: Article) -> dict[str, Any]:
    """Summary of an article carried by every published event."""
    return {
        "event": event_type,
        "article_id": article.id,
        "source": article.source,
        "status": article.status.value,
        "score": article.score,
        "flags": [f.type.value for f in article.flags],
        "tags": list(article.tags),
        "occurred_at": utc_now().isoformat(),
    }
