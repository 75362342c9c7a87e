"""Application service that analyzes and manages articles."""

import logging
import math
import time
from collections.abc import Awaitable
from pathlib import Path
from typing import Any, TypeVar

from reality_filter.analyzer.base import ContentAnalyzer
from reality_filter.cache.base import ArticleCache
from reality_filter.data import Article, ArticleMetadata, ArticleStatus
from reality_filter.errors import AnalysisError, ArticleNotFoundError
from reality_filter.events.base import EventPublisher
from reality_filter.factcheck.base import FactChecker
from reality_filter.repository.base import ArticleRepository
from reality_filter.run_logger import RunLogger
from reality_filter.scoring import calculate_credibility_score

logger = logging.getLogger(__name__)

T = TypeVar("T")

BIAS_DETECTOR = "bias_detector"
FACT_CHECKER = "fact_checker"
WORDS_PER_MINUTE = 200


def count_words(text: str) -> int:
    return len(text.split())


def reading_time_minutes(word_count: int) -> int:
    """Minutes to read ``word_count`` words, rounded up."""
    return math.ceil(word_count / WORDS_PER_MINUTE)


class ArticleAnalyzerService:
    """Orchestrates analysis and storage of articles.

    Flow of ``analyze_article``:
    1. Content analyzer: sentiment, entities, bias, language
    2. Fact checker: claim flags, source reputation
    3. Metadata, flags, score and status are applied to the article
    4. The article is written to the repository
    5. Cache refresh and event publishing are attempted; their failures
       are logged and do not fail the analysis
    6. The run log, if enabled, is written; a write failure is only logged

    Steps run one after another. A failing step raises ``AnalysisError``
    before anything is written.

    Args:
        repository: Article persistence.
        cache: Article cache.
        fact_checker: Fact checking and source reputation.
        content_analyzer: Sentiment, entity, bias and language analysis.
        event_publisher: Receives analyzed/flagged events.
        run_log_dir: If set, each analysis is recorded as a JSON file here.
    """

    def __init__(
        self,
        repository: ArticleRepository,
        cache: ArticleCache,
        fact_checker: FactChecker,
        content_analyzer: ContentAnalyzer,
        event_publisher: EventPublisher,
        run_log_dir: Path | None = None,
    ) -> None:
        self._repository = repository
        self._cache = cache
        self._fact_checker = fact_checker
        self._content_analyzer = content_analyzer
        self._event_publisher = event_publisher
        self._run_log_dir = run_log_dir

    # ------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------

    async def analyze_article(self, article: Article) -> None:
        """Run all analysis steps on ``article`` and persist the result.

        Args:
            article: Article to analyze; mutated in place.

        Raises:
            AnalysisError: If an analyzer or fact checker call fails.
            ArticleNotFoundError: If the article was never saved.
        """
        run_logger = RunLogger(self._run_log_dir)
        run_logger.start(article)
        try:
            await self._analyze(article, run_logger)
        except Exception as e:
            self._finish_run(run_logger, article, e)
            raise
        self._finish_run(run_logger, article)

    def _finish_run(
        self, run_logger: RunLogger, article: Article, error: BaseException | None = None
    ) -> None:
        try:
            path = run_logger.finish(article, error=error)
        except OSError as e:
            logger.warning(f"Failed to write run log for article {article.id}: {e}")
            return
        if path is not None:
            logger.debug(f"Run log written to {path}")

    async def _analyze(self, article: Article, run_logger: RunLogger) -> None:
        analyzer_name = type(self._content_analyzer).__name__
        checker_name = type(self._fact_checker).__name__
        content = article.content

        sentiment = await self._step(
            run_logger,
            "analyze sentiment",
            analyzer_name,
            content,
            self._content_analyzer.analyze_sentiment(content),
        )
        entities = await self._step(
            run_logger,
            "extract entities",
            analyzer_name,
            content,
            self._content_analyzer.extract_entities(content),
        )
        bias_flags = await self._step(
            run_logger,
            "detect bias",
            analyzer_name,
            content,
            self._content_analyzer.detect_bias(content),
        )
        fact_flags = await self._step(
            run_logger,
            "check facts",
            checker_name,
            article,
            self._fact_checker.check_facts(article),
        )
        source_score = await self._step(
            run_logger,
            "get source reputation",
            checker_name,
            article.source,
            self._fact_checker.get_source_reputation(article.source),
        )
        language = await self._step(
            run_logger,
            "detect language",
            analyzer_name,
            content,
            self._content_analyzer.detect_language(content),
        )

        word_count = count_words(content)
        article.update_metadata(
            ArticleMetadata(
                entities=list(entities),
                sentiment=sentiment,
                language=language,
                word_count=word_count,
                reading_time=reading_time_minutes(word_count),
            )
        )

        for flag in bias_flags:
            article.add_flag(flag.type, flag.confidence, flag.details, BIAS_DETECTOR)
        for flag in fact_flags:
            article.add_flag(flag.type, flag.confidence, flag.details, FACT_CHECKER)

        article.update_score(
            calculate_credibility_score(source_score, sentiment, len(article.flags))
        )
        article.update_status(
            ArticleStatus.FLAGGED if article.flags else ArticleStatus.ANALYZED
        )

        await self._repository.update(article)
        logger.info(
            f"Analyzed article {article.id}: score={article.score:.3f} "
            f"flags={len(article.flags)} status={article.status.value}"
        )

        await self._refresh_cache(article)

        try:
            await self._event_publisher.publish_article_analyzed(article)
        except Exception as e:
            logger.warning(f"Failed to publish article analyzed event: {e}")

        if article.status == ArticleStatus.FLAGGED:
            try:
                await self._event_publisher.publish_article_flagged(article)
            except Exception as e:
                logger.warning(f"Failed to publish article flagged event: {e}")

    async def _step(
        self,
        run_logger: RunLogger,
        step: str,
        component: str,
        input_data: Any,
        call: Awaitable[T],
    ) -> T:
        t0 = time.monotonic()
        try:
            result = await call
        except Exception as e:
            raise AnalysisError(step, e) from e
        run_logger.record_step(
            step.replace(" ", "_"), component, input_data, result, time.monotonic() - t0
        )
        return result

    async def get_analysis_result(self, article_id: str) -> Article:
        """Return the article with its analysis, trying the cache first.

        Cache errors are logged and treated as a miss.

        Raises:
            ArticleNotFoundError: If the article does not exist.
        """
        try:
            cached = await self._cache.get(article_id)
        except Exception as e:
            logger.warning(f"Failed to read article {article_id} from cache: {e}")
            cached = None
        if cached is not None:
            return cached

        article = await self._repository.find_by_id(article_id)
        if article is None:
            raise ArticleNotFoundError(article_id)

        await self._refresh_cache(article)
        return article

    async def reprocess_article(self, article_id: str) -> Article:
        """Clear previous analysis results and analyze the article again.

        Raises:
            ArticleNotFoundError: If the article does not exist.
            AnalysisError: If an analysis step fails.
        """
        article = await self._repository.find_by_id(article_id)
        if article is None:
            raise ArticleNotFoundError(article_id)

        article.reset_analysis()
        await self.analyze_article(article)
        return article

    # ------------------------------------------------------------
    # Management
    # ------------------------------------------------------------

    async def create_article(self, article: Article) -> None:
        await self._repository.save(article)
        logger.info(f"Created article {article.id} from {article.source!r}")

    async def get_article(self, article_id: str) -> Article:
        article = await self._repository.find_by_id(article_id)
        if article is None:
            raise ArticleNotFoundError(article_id)
        return article

    async def list_flagged_articles(self, limit: int, offset: int) -> list[Article]:
        return await self._repository.find_flagged(limit, offset)

    async def update_article_status(self, article_id: str, status: ArticleStatus) -> Article:
        article = await self.get_article(article_id)
        article.update_status(status)
        await self._repository.update(article)
        try:
            await self._cache.delete(article_id)
        except Exception as e:
            logger.warning(f"Failed to invalidate cached article {article_id}: {e}")
        return article

    async def _refresh_cache(self, article: Article) -> None:
        try:
            await self._cache.set(article)
        except Exception as e:
            logger.warning(f"Failed to update cache for article {article.id}: {e}")
