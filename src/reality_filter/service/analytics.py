"""Analytics queries over recorded article events."""

import re
from datetime import datetime, timedelta

from reality_filter.analytics.base import AnalyticsStore
from reality_filter.data import FlagType, utc_now
from reality_filter.errors import InvalidRequestError

TRENDING_WINDOW = timedelta(days=7)

_RANGE_PATTERN = re.compile(r"^(\d+)([hdw])$")
_RANGE_UNITS = {"h": "hours", "d": "days", "w": "weeks"}


def parse_time_range(time_range: str, *, now: datetime | None = None) -> datetime | None:
    """Turn a range such as "24h", "7d" or "2w" into its start time.

    Args:
        time_range: ``<n>h``, ``<n>d``, ``<n>w`` or ``all``.
        now: Reference time (defaults to the current UTC time).

    Returns:
        The start of the range, or None for ``all``.

    Raises:
        InvalidRequestError: If the range is not recognised or reaches
            past the earliest representable date.
    """
    text = time_range.strip().lower()
    if text == "all":
        return None
    match = _RANGE_PATTERN.match(text)
    if match is None:
        msg = f"Invalid time range {time_range!r}: expected e.g. '24h', '7d', '2w' or 'all'"
        raise InvalidRequestError(msg)
    unit = _RANGE_UNITS[match.group(2)]
    try:
        return (now or utc_now()) - timedelta(**{unit: int(match.group(1))})
    except (OverflowError, ValueError) as e:
        msg = f"Invalid time range {time_range!r}: too far in the past"
        raise InvalidRequestError(msg) from e


class AnalyticsService:
    """Source, flag and topic statistics backed by an ``AnalyticsStore``.

    Args:
        store: Where article events are recorded.
    """

    def __init__(self, store: AnalyticsStore) -> None:
        self._store = store

    async def get_source_stats(self, time_range: str) -> dict[str, int]:
        return await self._store.get_source_stats(parse_time_range(time_range))

    async def get_flag_stats(self, time_range: str) -> dict[FlagType, int]:
        return await self._store.get_flag_stats(parse_time_range(time_range))

    async def get_trending_topics(self, limit: int) -> list[str]:
        """Most frequent article tags over the last week."""
        if limit <= 0:
            msg = "limit must be positive"
            raise InvalidRequestError(msg)
        counts = await self._store.get_tag_counts(utc_now() - TRENDING_WINDOW, limit)
        return [tag for tag, _ in counts]
