"""HTTP routes for article submission, analysis and analytics."""

from fastapi import APIRouter, Depends, Query, Request, Response, status

from reality_filter.api.schemas import (
    AnalysisResponse,
    AnalysisResultResponse,
    ArticleOut,
    CreateArticleRequest,
    ErrorResponse,
    FlaggedArticlesResponse,
    FlagOut,
    MetadataOut,
    StatsResponse,
    StatusResponse,
    TrendingResponse,
    UpdateStatusRequest,
)
from reality_filter.config.factory import Services
from reality_filter.data import Article
from reality_filter.service.analytics import AnalyticsService
from reality_filter.service.analyzer import ArticleAnalyzerService

NOT_FOUND = {404: {"model": ErrorResponse}}
BAD_REQUEST = {400: {"model": ErrorResponse}}


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_analyzer(services: Services = Depends(get_services)) -> ArticleAnalyzerService:
    return services.analyzer


def get_analytics(services: Services = Depends(get_services)) -> AnalyticsService:
    return services.analytics


def _flags(article: Article) -> list[FlagOut]:
    return [FlagOut.model_validate(f) for f in article.flags]


router = APIRouter()


@router.post(
    "/articles",
    status_code=status.HTTP_201_CREATED,
    response_model=StatusResponse,
    responses=BAD_REQUEST,
    tags=["Articles"],
)
async def create_article(
    body: CreateArticleRequest,
    analyzer: ArticleAnalyzerService = Depends(get_analyzer),
) -> StatusResponse:
    """Submit a new article for analysis."""
    article = Article.new(body.title, body.content, body.source, body.author, body.tags)
    await analyzer.create_article(article)
    return StatusResponse(article_id=article.id, status=article.status)


@router.get(
    "/articles/flagged",
    response_model=FlaggedArticlesResponse,
    responses=BAD_REQUEST,
    tags=["Articles"],
)
async def list_flagged_articles(
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    analyzer: ArticleAnalyzerService = Depends(get_analyzer),
) -> FlaggedArticlesResponse:
    """List articles that were flagged during analysis, newest first."""
    articles = await analyzer.list_flagged_articles(limit, offset)
    return FlaggedArticlesResponse(
        articles=[ArticleOut.model_validate(a) for a in articles],
        limit=limit,
        offset=offset,
    )


@router.get(
    "/articles/{article_id}",
    response_model=ArticleOut,
    responses=NOT_FOUND,
    tags=["Articles"],
)
async def get_article(
    article_id: str,
    analyzer: ArticleAnalyzerService = Depends(get_analyzer),
) -> ArticleOut:
    article = await analyzer.get_article(article_id)
    return ArticleOut.model_validate(article)


@router.patch(
    "/articles/{article_id}/status",
    response_model=StatusResponse,
    responses={**NOT_FOUND, **BAD_REQUEST},
    tags=["Articles"],
)
async def update_article_status(
    article_id: str,
    body: UpdateStatusRequest,
    analyzer: ArticleAnalyzerService = Depends(get_analyzer),
) -> StatusResponse:
    """Set an article's status, e.g. after manual review."""
    article = await analyzer.update_article_status(article_id, body.status)
    return StatusResponse(article_id=article.id, status=article.status)


@router.post(
    "/articles/{article_id}/analyze",
    response_model=AnalysisResponse,
    responses=NOT_FOUND,
    tags=["Analysis"],
)
async def analyze_article(
    article_id: str,
    analyzer: ArticleAnalyzerService = Depends(get_analyzer),
) -> AnalysisResponse:
    """Run the analysis pipeline on an existing article."""
    article = await analyzer.get_article(article_id)
    await analyzer.analyze_article(article)
    return AnalysisResponse(
        article_id=article.id,
        score=article.score,
        flags=_flags(article),
        status=article.status,
    )


@router.get(
    "/articles/{article_id}/analysis",
    response_model=AnalysisResultResponse,
    responses=NOT_FOUND,
    tags=["Analysis"],
)
async def get_analysis_result(
    article_id: str,
    analyzer: ArticleAnalyzerService = Depends(get_analyzer),
) -> AnalysisResultResponse:
    article = await analyzer.get_analysis_result(article_id)
    return AnalysisResultResponse(
        article_id=article.id,
        score=article.score,
        flags=_flags(article),
        status=article.status,
        metadata=MetadataOut.model_validate(article.metadata),
    )


@router.post(
    "/articles/{article_id}/reprocess",
    status_code=status.HTTP_202_ACCEPTED,
    responses=NOT_FOUND,
    tags=["Analysis"],
)
async def reprocess_article(
    article_id: str,
    analyzer: ArticleAnalyzerService = Depends(get_analyzer),
) -> Response:
    """Discard previous results and analyze the article again."""
    await analyzer.reprocess_article(article_id)
    return Response(status_code=status.HTTP_202_ACCEPTED)


@router.get(
    "/analytics/sources",
    response_model=StatsResponse,
    responses=BAD_REQUEST,
    tags=["Analytics"],
)
async def source_stats(
    time_range: str = Query("7d", alias="range"),
    analytics: AnalyticsService = Depends(get_analytics),
) -> StatsResponse:
    """Number of analyzed articles per source."""
    stats = await analytics.get_source_stats(time_range)
    return StatsResponse(range=time_range, stats=stats)


@router.get(
    "/analytics/flags",
    response_model=StatsResponse,
    responses=BAD_REQUEST,
    tags=["Analytics"],
)
async def flag_stats(
    time_range: str = Query("7d", alias="range"),
    analytics: AnalyticsService = Depends(get_analytics),
) -> StatsResponse:
    """Number of flags raised per flag type."""
    stats = await analytics.get_flag_stats(time_range)
    return StatsResponse(range=time_range, stats={k.value: v for k, v in stats.items()})


@router.get(
    "/analytics/trending",
    response_model=TrendingResponse,
    responses=BAD_REQUEST,
    tags=["Analytics"],
)
async def trending_topics(
    limit: int = Query(10, ge=1, le=100),
    analytics: AnalyticsService = Depends(get_analytics),
) -> TrendingResponse:
    """Most common article tags over the last week."""
    return TrendingResponse(topics=await analytics.get_trending_topics(limit))
