"""Request and response bodies for the HTTP API."""

from datetime import datetime

from pydantic import BaseModel, Field

from reality_filter.data import ArticleStatus, EntityType, FlagType


class CreateArticleRequest(BaseModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    source: str = Field(min_length=1)
    author: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list)


class UpdateStatusRequest(BaseModel):
    status: ArticleStatus


class EntityOut(BaseModel):
    type: EntityType
    value: str

    model_config = {"from_attributes": True}


class FlagOut(BaseModel):
    type: FlagType
    confidence: float
    details: str
    detected_by: str
    detected_at: datetime

    model_config = {"from_attributes": True}


class MetadataOut(BaseModel):
    entities: list[EntityOut]
    sentiment: float
    language: str
    word_count: int
    reading_time: int

    model_config = {"from_attributes": True}


class ArticleOut(BaseModel):
    id: str
    title: str
    content: str
    source: str
    author: str
    tags: list[str]
    created_at: datetime
    updated_at: datetime
    score: float
    flags: list[FlagOut]
    status: ArticleStatus
    metadata: MetadataOut

    model_config = {"from_attributes": True}


class StatusResponse(BaseModel):
    article_id: str
    status: ArticleStatus


class AnalysisResponse(BaseModel):
    article_id: str
    score: float
    flags: list[FlagOut]
    status: ArticleStatus


class AnalysisResultResponse(AnalysisResponse):
    metadata: MetadataOut


class FlaggedArticlesResponse(BaseModel):
    articles: list[ArticleOut]
    limit: int
    offset: int


class StatsResponse(BaseModel):
    range: str
    stats: dict[str, int]


class TrendingResponse(BaseModel):
    topics: list[str]


class ErrorResponse(BaseModel):
    error: str
