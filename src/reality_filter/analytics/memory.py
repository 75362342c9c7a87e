"""In-memory analytics store for development and tests."""

from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from reality_filter.data import FlagType, utc_now
from reality_filter.events.base import ARTICLE_ANALYZED


@dataclass(frozen=True)
class StoredEvent:
    article_id: str
    event_type: str
    metadata: dict[str, Any]
    recorded_at: datetime


class InMemoryAnalyticsStore:
    """Keep analytics events in a list; same counting rules as the SQL store."""

    def __init__(self) -> None:
        self.events: list[StoredEvent] = []

    async def store_article_event(
        self, article_id: str, event_type: str, metadata: dict[str, Any]
    ) -> None:
        self.events.append(StoredEvent(article_id, event_type, dict(metadata), utc_now()))

    def _analyzed(self, since: datetime | None) -> list[StoredEvent]:
        return [
            e
            for e in self.events
            if e.event_type == ARTICLE_ANALYZED and (since is None or e.recorded_at >= since)
        ]

    async def get_source_stats(self, since: datetime | None) -> dict[str, int]:
        return dict(Counter(str(e.metadata.get("source", "")) for e in self._analyzed(since)))

    async def get_flag_stats(self, since: datetime | None) -> dict[FlagType, int]:
        counts: Counter[FlagType] = Counter()
        for event in self._analyzed(since):
            for value in event.metadata.get("flags", []):
                try:
                    counts[FlagType(value)] += 1
                except ValueError:
                    continue
        return dict(counts)

    async def get_tag_counts(self, since: datetime | None, limit: int) -> list[tuple[str, int]]:
        counts: Counter[str] = Counter()
        for event in self._analyzed(since):
            counts.update(t.strip().lower() for t in event.metadata.get("tags", []) if t.strip())
        return counts.most_common(limit)
