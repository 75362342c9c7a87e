"""MongoDB article repository."""

import logging
from typing import Any

from pymongo import ASCENDING, DESCENDING, AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection

from reality_filter.data import Article, ArticleStatus, article_from_dict, article_to_dict, utc_now
from reality_filter.errors import ArticleNotFoundError

logger = logging.getLogger(__name__)

COLLECTION_NAME = "articles"


def _to_document(article: Article) -> dict[str, Any]:
    document = article_to_dict(article)
    document["_id"] = document.pop("id")
    return document


class MongoArticleRepository:
    """Store articles as whole documents in a MongoDB collection.

    The article id is the document ``_id``. ``save`` upserts and keeps the
    first ``created_at`` ever written; ``update`` requires an existing
    document.

    Args:
        collection: Async collection holding article documents.
    """

    def __init__(self, collection: AsyncCollection) -> None:
        self._collection = collection

    @classmethod
    def from_client(cls, client: AsyncMongoClient, database: str) -> "MongoArticleRepository":
        return cls(client[database][COLLECTION_NAME])

    async def ensure_indexes(self) -> None:
        """Create the index backing ``find_flagged``."""
        await self._collection.create_index(
            [("status", ASCENDING), ("updated_at", DESCENDING)],
            name="status_updated_at",
        )

    async def save(self, article: Article) -> None:
        article.updated_at = utc_now()
        document = _to_document(article)
        created_at = document.pop("created_at")
        await self._collection.update_one(
            {"_id": article.id},
            {"$set": document, "$setOnInsert": {"created_at": created_at}},
            upsert=True,
        )
        logger.debug(f"Saved article {article.id}")

    async def find_by_id(self, article_id: str) -> Article | None:
        document = await self._collection.find_one({"_id": article_id})
        if document is None:
            return None
        return article_from_dict(document)

    async def find_flagged(self, limit: int, offset: int) -> list[Article]:
        cursor = (
            self._collection.find({"status": ArticleStatus.FLAGGED.value})
            .sort("updated_at", DESCENDING)
            .skip(offset)
            .limit(limit)
        )
        documents = await cursor.to_list()
        return [article_from_dict(d) for d in documents]

    async def update(self, article: Article) -> None:
        article.updated_at = utc_now()
        document = _to_document(article)
        document.pop("_id")
        result = await self._collection.update_one({"_id": article.id}, {"$set": document})
        if result.matched_count == 0:
            raise ArticleNotFoundError(article.id)
