from reality_filter.repository.base import ArticleRepository
from reality_filter.repository.memory import InMemoryArticleRepository
from reality_filter.repository.mongo import MongoArticleRepository

__all__ = [
    "ArticleRepository",
    "InMemoryArticleRepository",
    "MongoArticleRepository",
]
