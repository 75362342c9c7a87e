"""Conversion between Article objects and plain mappings.

The document store keeps datetimes native; the cache stores JSON, so
``json_safe=True`` renders them as ISO-8601 strings.
"""

from datetime import UTC, datetime
from typing import Any

from reality_filter.data.models import (
    Article,
    ArticleMetadata,
    ArticleStatus,
    Entity,
    EntityType,
    Flag,
    FlagType,
)


def _dump_datetime(value: datetime, json_safe: bool) -> datetime | str:
    return value.isoformat() if json_safe else value


def _load_datetime(value: Any) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if not isinstance(value, datetime):
        msg = f"Expected datetime, got {type(value).__name__}"
        raise ValueError(msg)
    # pymongo hands back naive datetimes that are UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


def flag_to_dict(flag: Flag, *, json_safe: bool = False) -> dict[str, Any]:
    return {
        "type": flag.type.value,
        "confidence": flag.confidence,
        "details": flag.details,
        "detected_by": flag.detected_by,
        "detected_at": _dump_datetime(flag.detected_at, json_safe),
    }


def flag_from_dict(data: dict[str, Any]) -> Flag:
    return Flag(
        type=FlagType(data["type"]),
        confidence=float(data.get("confidence", 0.0)),
        details=str(data.get("details", "")),
        detected_by=str(data.get("detected_by", "")),
        detected_at=_load_datetime(data["detected_at"]),
    )


def metadata_to_dict(metadata: ArticleMetadata) -> dict[str, Any]:
    return {
        "entities": [{"type": e.type.value, "value": e.value} for e in metadata.entities],
        "sentiment": metadata.sentiment,
        "language": metadata.language,
        "word_count": metadata.word_count,
        "reading_time": metadata.reading_time,
    }


def metadata_from_dict(data: dict[str, Any]) -> ArticleMetadata:
    return ArticleMetadata(
        entities=[
            Entity(type=EntityType(e["type"]), value=str(e["value"]))
            for e in data.get("entities", [])
        ],
        sentiment=float(data.get("sentiment", 0.0)),
        language=str(data.get("language", "")),
        word_count=int(data.get("word_count", 0)),
        reading_time=int(data.get("reading_time", 0)),
    )


def article_to_dict(article: Article, *, json_safe: bool = False) -> dict[str, Any]:
    """Convert an article to a plain mapping.

    Args:
        article: Article to convert.
        json_safe: Render datetimes as ISO-8601 strings.

    Returns:
        Mapping keyed by field name, with enum members replaced by their values.
    """
    return {
        "id": article.id,
        "title": article.title,
        "content": article.content,
        "source": article.source,
        "author": article.author,
        "tags": list(article.tags),
        "created_at": _dump_datetime(article.created_at, json_safe),
        "updated_at": _dump_datetime(article.updated_at, json_safe),
        "score": article.score,
        "flags": [flag_to_dict(f, json_safe=json_safe) for f in article.flags],
        "status": article.status.value,
        "metadata": metadata_to_dict(article.metadata),
    }


def article_from_dict(data: dict[str, Any]) -> Article:
    """Rebuild an article from a mapping produced by ``article_to_dict``.

    A Mongo-style ``_id`` key is accepted in place of ``id``.

    Raises:
        ValueError: If an enum value or datetime cannot be parsed.
        KeyError: If a required field is missing.
    """
    article_id = data["_id"] if "_id" in data else data["id"]
    return Article(
        id=str(article_id),
        title=data["title"],
        content=data["content"],
        source=data["source"],
        author=data["author"],
        tags=list(data.get("tags") or []),
        created_at=_load_datetime(data["created_at"]),
        updated_at=_load_datetime(data["updated_at"]),
        score=float(data.get("score", 0.0)),
        flags=[flag_from_dict(f) for f in data.get("flags") or []],
        status=ArticleStatus(data.get("status", ArticleStatus.PENDING.value)),
        metadata=metadata_from_dict(data.get("metadata") or {}),
    )
