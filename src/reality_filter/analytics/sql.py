"""Relational analytics store backed by SQLAlchemy."""

import asyncio
import logging
from collections import Counter
from collections.abc import Iterator
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Engine,
    Index,
    Integer,
    Select,
    String,
    create_engine,
    func,
    select,
)
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from reality_filter.data import FlagType
from reality_filter.events.base import ARTICLE_ANALYZED

logger = logging.getLogger(__name__)

PAYLOAD_BATCH_SIZE = 500

Base = declarative_base()


def _naive_utc(moment: datetime) -> datetime:
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC).replace(tzinfo=None)
    return moment


class ArticleEventRecord(Base):
    """One article lifecycle event."""

    __tablename__ = "article_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    article_id = Column(String(64), nullable=False, index=True)
    event_type = Column(String(50), nullable=False)
    source = Column(String(255), nullable=False, default="")
    payload = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False, default=lambda: _naive_utc(datetime.now(tz=UTC)))

    __table_args__ = (Index("ix_article_events_type_created", "event_type", "created_at"),)


def init_engine(url: str, **kwargs: Any) -> Engine:
    """Create an engine for ``url`` and make sure the schema exists."""
    engine = create_engine(url, pool_pre_ping=True, **kwargs)
    Base.metadata.create_all(engine)
    return engine


class SQLAnalyticsStore:
    """Record article events in the ``article_events`` table.

    Statistics are computed from events of type ``article_analyzed`` only,
    so an article that is both analyzed and flagged is counted once.
    Source counts are grouped in SQL; flag and tag counts read payloads in
    batches.
    Database calls are synchronous and run in a worker thread.

    Args:
        engine: SQLAlchemy engine, e.g. from ``init_engine``.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    async def store_article_event(
        self, article_id: str, event_type: str, metadata: dict[str, Any]
    ) -> None:
        await asyncio.to_thread(self._insert, article_id, event_type, metadata)

    async def get_source_stats(self, since: datetime | None) -> dict[str, int]:
        return await asyncio.to_thread(self._source_counts, since)

    async def get_flag_stats(self, since: datetime | None) -> dict[FlagType, int]:
        return await asyncio.to_thread(self._flag_counts, since)

    async def get_tag_counts(self, since: datetime | None, limit: int) -> list[tuple[str, int]]:
        counts = await asyncio.to_thread(self._tag_counts, since)
        return counts.most_common(limit)

    def close(self) -> None:
        self._engine.dispose()

    def _insert(self, article_id: str, event_type: str, metadata: dict[str, Any]) -> None:
        record = ArticleEventRecord(
            article_id=article_id,
            event_type=event_type,
            source=str(metadata.get("source", "")),
            payload=metadata,
        )
        with self._session_factory() as session:
            session.add(record)
            session.commit()

    def _analyzed(self, stmt: Select, since: datetime | None) -> Select:
        stmt = stmt.where(ArticleEventRecord.event_type == ARTICLE_ANALYZED)
        if since is not None:
            stmt = stmt.where(ArticleEventRecord.created_at >= _naive_utc(since))
        return stmt

    def _source_counts(self, since: datetime | None) -> dict[str, int]:
        stmt = self._analyzed(
            select(ArticleEventRecord.source, func.count()).group_by(ArticleEventRecord.source),
            since,
        )
        with self._session_factory() as session:
            return {source: count for source, count in session.execute(stmt)}

    def _payloads(self, session: Session, since: datetime | None) -> Iterator[dict[str, Any]]:
        """Analyzed-event payloads, fetched ``PAYLOAD_BATCH_SIZE`` rows at a time."""
        stmt = self._analyzed(select(ArticleEventRecord.payload), since)
        for payload in session.scalars(stmt.execution_options(yield_per=PAYLOAD_BATCH_SIZE)):
            yield payload or {}

    def _flag_counts(self, since: datetime | None) -> dict[FlagType, int]:
        counts: Counter[FlagType] = Counter()
        with self._session_factory() as session:
            for payload in self._payloads(session, since):
                for value in payload.get("flags", []):
                    try:
                        counts[FlagType(value)] += 1
                    except ValueError:
                        logger.warning(f"Skipping unknown flag type {value!r} in analytics")
        return dict(counts)

    def _tag_counts(self, since: datetime | None) -> Counter[str]:
        counts: Counter[str] = Counter()
        with self._session_factory() as session:
            for payload in self._payloads(session, since):
                counts.update(tag.strip().lower() for tag in payload.get("tags", []) if tag.strip())
        return counts
