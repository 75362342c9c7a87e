from datetime import datetime
from typing import Any, Protocol

from reality_filter.data import FlagType


class AnalyticsStore(Protocol):
    """Interface for analytics event storage.

    ``since`` bounds every query to events recorded at or after that
    moment; None means no bound.
    """

    async def store_article_event(
        self, article_id: str, event_type: str, metadata: dict[str, Any]
    ) -> None:
        """Record one article event.

        ``metadata`` may carry ``source`` (str), ``flags`` (list of flag type
        values) and ``tags`` (list of str); other keys are stored verbatim.
        """
        ...

    async def get_source_stats(self, since: datetime | None) -> dict[str, int]:
        """Count analyzed articles per source."""
        ...

    async def get_flag_stats(self, since: datetime | None) -> dict[FlagType, int]:
        """Count flags per flag type."""
        ...

    async def get_tag_counts(self, since: datetime | None, limit: int) -> list[tuple[str, int]]:
        """Return the ``limit`` most frequent tags with their counts."""
        ...
