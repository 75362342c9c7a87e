"""Data models for Reality Filter."""

from reality_filter.data.codec import article_from_dict, article_to_dict
from reality_filter.data.models import (
    Article,
    ArticleMetadata,
    ArticleStatus,
    Entity,
    EntityType,
    Flag,
    FlagType,
    utc_now,
)

__all__ = [
    "Article",
    "ArticleMetadata",
    "ArticleStatus",
    "Entity",
    "EntityType",
    "Flag",
    "FlagType",
    "article_from_dict",
    "article_to_dict",
    "utc_now",
]
