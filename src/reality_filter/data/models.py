"""Core data models for Reality Filter."""

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


class ArticleStatus(StrEnum):
    """Lifecycle state of an article."""

    PENDING = "PENDING"
    ANALYZED = "ANALYZED"
    FLAGGED = "FLAGGED"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"


class FlagType(StrEnum):
    """Kinds of issues a detector can raise against an article."""

    CLICKBAIT = "CLICKBAIT"
    MISLEADING = "MISLEADING"
    BIASED = "BIASED"
    UNVERIFIED = "UNVERIFIED"
    FACTUAL_ERROR = "FACTUAL_ERROR"
    HATE_SPEECH = "HATE_SPEECH"
    SPAM = "SPAM"


class EntityType(StrEnum):
    """Named entity categories."""

    PERSON = "PERSON"
    PLACE = "PLACE"
    DATE = "DATE"
    ORGANIZATION = "ORGANIZATION"
    PRODUCT = "PRODUCT"


@dataclass(frozen=True)
class Entity:
    """A named entity found in article content."""

    type: EntityType
    value: str


@dataclass(frozen=True)
class Flag:
    """An issue detected in an article.

    Adapters return flags without ``detected_by``; the analyzer service
    re-stamps them with the detector name when attaching them to an article.
    """

    type: FlagType
    confidence: float
    details: str = ""
    detected_by: str = ""
    detected_at: datetime = field(default_factory=utc_now)


@dataclass
class ArticleMetadata:
    """Information derived from the article content during analysis."""

    entities: list[Entity] = field(default_factory=list)
    sentiment: float = 0.0
    language: str = ""
    word_count: int = 0
    reading_time: int = 0  # minutes


@dataclass
class Article:
    """A submitted news article and its analysis results.

    The analyzer service is the only writer; every mutator bumps
    ``updated_at`` and the whole record is persisted on each write.
    """

    id: str
    title: str
    content: str
    source: str
    author: str
    tags: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    score: float = 0.0
    flags: list[Flag] = field(default_factory=list)
    status: ArticleStatus = ArticleStatus.PENDING
    metadata: ArticleMetadata = field(default_factory=ArticleMetadata)

    @classmethod
    def new(
        cls,
        title: str,
        content: str,
        source: str,
        author: str,
        tags: list[str] | None = None,
    ) -> "Article":
        """Create a pending article with a fresh id."""
        now = utc_now()
        return cls(
            id=str(uuid.uuid4()),
            title=title,
            content=content,
            source=source,
            author=author,
            tags=list(tags or []),
            created_at=now,
            updated_at=now,
        )

    def add_flag(
        self,
        flag_type: FlagType,
        confidence: float,
        details: str,
        detected_by: str,
    ) -> Flag:
        flag = Flag(
            type=flag_type,
            confidence=confidence,
            details=details,
            detected_by=detected_by,
        )
        self.flags.append(flag)
        self.status = ArticleStatus.FLAGGED
        self.updated_at = utc_now()
        return flag

    def update_score(self, score: float) -> None:
        self.score = score
        self.updated_at = utc_now()

    def update_status(self, status: ArticleStatus) -> None:
        self.status = status
        self.updated_at = utc_now()

    def update_metadata(self, metadata: ArticleMetadata) -> None:
        self.metadata = metadata
        self.updated_at = utc_now()

    def reset_analysis(self) -> None:
        """Drop all analysis results and return the article to PENDING."""
        self.flags = []
        self.score = 0.0
        self.status = ArticleStatus.PENDING
        self.metadata = ArticleMetadata()
        self.updated_at = utc_now()

    @property
    def is_flagged(self) -> bool:
        return bool(self.flags)
