"""Tests for analytics stores and the analytics service."""

from collections.abc import Iterator, Sequence
from datetime import UTC, datetime, timedelta

import pytest

from reality_filter.analytics import (
    AnalyticsStore,
    InMemoryAnalyticsStore,
    SQLAnalyticsStore,
    init_engine,
)
from reality_filter.analytics.sql import PAYLOAD_BATCH_SIZE, ArticleEventRecord
from reality_filter.data import FlagType
from reality_filter.errors import InvalidRequestError
from reality_filter.events import ARTICLE_ANALYZED, ARTICLE_FLAGGED
from reality_filter.service.analytics import AnalyticsService, parse_time_range

NOW = datetime(2026, 5, 10, 12, 0, tzinfo=UTC)


def _meta(source: str, flags: Sequence[str] = (), tags: Sequence[str] = ()) -> dict:
    return {"source": source, "flags": list(flags), "tags": list(tags)}


async def _populate(store: AnalyticsStore) -> None:
    await store.store_article_event("a1", ARTICLE_ANALYZED, _meta("bbc.co.uk", tags=["Politics"]))
    await store.store_article_event(
        "a2", ARTICLE_ANALYZED, _meta("blog.net", ["CLICKBAIT", "SPAM"], ["politics ", "Tech"])
    )
    await store.store_article_event("a2", ARTICLE_FLAGGED, _meta("blog.net", ["CLICKBAIT"]))
    await store.store_article_event(
        "a3", ARTICLE_ANALYZED, _meta("blog.net", ["CLICKBAIT", "LEGACY"], ["tech", "politics"])
    )


@pytest.fixture
def sql_store(tmp_path) -> Iterator[SQLAnalyticsStore]:
    store = SQLAnalyticsStore(init_engine(f"sqlite:///{tmp_path / 'analytics.db'}"))
    yield store
    store.close()


@pytest.fixture(params=["memory", "sql"])
def store(request: pytest.FixtureRequest) -> AnalyticsStore:
    if request.param == "memory":
        return InMemoryAnalyticsStore()
    return request.getfixturevalue("sql_store")


class TestAnalyticsStores:
    """Both stores share counting rules."""

    async def test_source_stats_count_analyzed_events(self, store: AnalyticsStore) -> None:
        await _populate(store)
        assert await store.get_source_stats(None) == {"bbc.co.uk": 1, "blog.net": 2}

    async def test_flag_stats_skip_unknown_types(self, store: AnalyticsStore) -> None:
        await _populate(store)
        assert await store.get_flag_stats(None) == {FlagType.CLICKBAIT: 2, FlagType.SPAM: 1}

    async def test_tag_counts_normalize_case(self, store: AnalyticsStore) -> None:
        await _populate(store)
        assert await store.get_tag_counts(None, 10) == [("politics", 3), ("tech", 2)]
        assert await store.get_tag_counts(None, 1) == [("politics", 3)]

    async def test_since_excludes_older_events(self, store: AnalyticsStore) -> None:
        await _populate(store)
        future = datetime.now(tz=UTC) + timedelta(hours=1)
        assert await store.get_source_stats(future) == {}
        past = datetime.now(tz=UTC) - timedelta(hours=1)
        assert sum((await store.get_source_stats(past)).values()) == 3


class TestSQLAnalyticsStore:
    async def test_rows_persist_payload(self, sql_store: SQLAnalyticsStore) -> None:
        await sql_store.store_article_event("a1", ARTICLE_FLAGGED, _meta("x.com", ["SPAM"]))
        with sql_store._session_factory() as session:
            record = session.query(ArticleEventRecord).one()
        assert record.article_id == "a1"
        assert record.event_type == ARTICLE_FLAGGED
        assert record.source == "x.com"
        assert record.payload["flags"] == ["SPAM"]
        assert record.created_at.tzinfo is None

    async def test_stats_span_several_batches(self, sql_store: SQLAnalyticsStore) -> None:
        total = PAYLOAD_BATCH_SIZE * 2 + 7
        with sql_store._session_factory() as session:
            session.add_all(
                ArticleEventRecord(
                    article_id=f"a{i}",
                    event_type=ARTICLE_ANALYZED,
                    source="a.com" if i % 2 else "b.com",
                    payload=_meta("", ["SPAM"], ["x"]),
                )
                for i in range(total)
            )
            session.commit()

        assert await sql_store.get_source_stats(None) == {
            "a.com": total // 2,
            "b.com": total - total // 2,
        }
        assert await sql_store.get_flag_stats(None) == {FlagType.SPAM: total}
        assert await sql_store.get_tag_counts(None, 5) == [("x", total)]


class TestParseTimeRange:
    @pytest.mark.parametrize(
        ("text", "delta"),
        [
            ("24h", timedelta(hours=24)),
            ("7d", timedelta(days=7)),
            (" 2W ", timedelta(weeks=2)),
            ("0d", timedelta(0)),
        ],
    )
    def test_valid_ranges(self, text: str, delta: timedelta) -> None:
        assert parse_time_range(text, now=NOW) == NOW - delta

    def test_all_means_unbounded(self) -> None:
        assert parse_time_range("all", now=NOW) is None

    @pytest.mark.parametrize("text", ["", "7", "d7", "7m", "-1d", "seven days"])
    def test_invalid_ranges(self, text: str) -> None:
        with pytest.raises(InvalidRequestError, match="Invalid time range"):
            parse_time_range(text, now=NOW)

    @pytest.mark.parametrize("text", ["3000000d", "1000000000w", "9" * 5000 + "h"])
    def test_ranges_before_min_date(self, text: str) -> None:
        with pytest.raises(InvalidRequestError, match="too far in the past"):
            parse_time_range(text, now=NOW)

    def test_invalid_range_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_time_range("forever", now=NOW)


class TestAnalyticsService:
    @pytest.fixture
    async def service(self) -> AnalyticsService:
        store = InMemoryAnalyticsStore()
        await _populate(store)
        return AnalyticsService(store)

    async def test_source_stats(self, service: AnalyticsService) -> None:
        assert await service.get_source_stats("7d") == {"bbc.co.uk": 1, "blog.net": 2}

    async def test_flag_stats(self, service: AnalyticsService) -> None:
        stats = await service.get_flag_stats("all")
        assert stats[FlagType.CLICKBAIT] == 2

    async def test_invalid_range_raises(self, service: AnalyticsService) -> None:
        with pytest.raises(ValueError):
            await service.get_source_stats("forever")

    async def test_trending_topics(self, service: AnalyticsService) -> None:
        assert await service.get_trending_topics(5) == ["politics", "tech"]

    async def test_trending_requires_positive_limit(self, service: AnalyticsService) -> None:
        with pytest.raises(InvalidRequestError, match="limit"):
            await service.get_trending_topics(0)
