"""Tests for the article analyzer service."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from reality_filter.analyzer import NoOpContentAnalyzer
from reality_filter.cache import InMemoryArticleCache
from reality_filter.data import (
    Article,
    ArticleStatus,
    Entity,
    EntityType,
    Flag,
    FlagType,
)
from reality_filter.errors import AnalysisError, ArticleNotFoundError
from reality_filter.factcheck import NoOpFactChecker
from reality_filter.repository import InMemoryArticleRepository
from reality_filter.service import ArticleAnalyzer, ArticleManager
from reality_filter.service.analyzer import (
    ArticleAnalyzerService,
    count_words,
    reading_time_minutes,
)

# -- Fixtures --


@pytest.fixture
def repository() -> InMemoryArticleRepository:
    return InMemoryArticleRepository()


@pytest.fixture
def cache() -> InMemoryArticleCache:
    return InMemoryArticleCache()


@pytest.fixture
def publisher() -> MagicMock:
    publisher = MagicMock()
    publisher.publish_article_analyzed = AsyncMock()
    publisher.publish_article_flagged = AsyncMock()
    return publisher


@pytest.fixture
def content_analyzer() -> MagicMock:
    analyzer = MagicMock()
    analyzer.analyze_sentiment = AsyncMock(return_value=0.5)
    analyzer.extract_entities = AsyncMock(return_value=[Entity(EntityType.PLACE, "Springfield")])
    analyzer.detect_bias = AsyncMock(return_value=[])
    analyzer.detect_language = AsyncMock(return_value="en")
    return analyzer


@pytest.fixture
def service(
    repository: InMemoryArticleRepository,
    cache: InMemoryArticleCache,
    content_analyzer: MagicMock,
    publisher: MagicMock,
) -> ArticleAnalyzerService:
    return ArticleAnalyzerService(
        repository=repository,
        cache=cache,
        fact_checker=NoOpFactChecker(),
        content_analyzer=content_analyzer,
        event_publisher=publisher,
    )


@pytest.fixture
async def stored(service: ArticleAnalyzerService, article: Article) -> Article:
    await service.create_article(article)
    return article


# -- Helpers --


def test_count_words() -> None:
    assert count_words("  one two\tthree\nfour ") == 4
    assert count_words("") == 0


def test_reading_time_rounds_up() -> None:
    assert reading_time_minutes(0) == 0
    assert reading_time_minutes(1) == 1
    assert reading_time_minutes(200) == 1
    assert reading_time_minutes(201) == 2


# -- Analysis --


class TestAnalyzeArticle:
    async def test_clean_article_is_analyzed(
        self,
        service: ArticleAnalyzerService,
        repository: InMemoryArticleRepository,
        stored: Article,
        publisher: MagicMock,
    ) -> None:
        await service.analyze_article(stored)

        assert stored.status == ArticleStatus.ANALYZED
        assert stored.score == pytest.approx(0.92)
        assert stored.metadata.language == "en"
        assert stored.metadata.sentiment == 0.5
        assert stored.metadata.word_count == 12
        assert stored.metadata.reading_time == 1
        assert stored.metadata.entities == [Entity(EntityType.PLACE, "Springfield")]

        persisted = await repository.find_by_id(stored.id)
        assert persisted is not None
        assert persisted.status == ArticleStatus.ANALYZED
        assert persisted.score == stored.score

        publisher.publish_article_analyzed.assert_awaited_once()
        publisher.publish_article_flagged.assert_not_awaited()

    async def test_flags_are_stamped_with_detector(
        self,
        service: ArticleAnalyzerService,
        stored: Article,
        content_analyzer: MagicMock,
        publisher: MagicMock,
    ) -> None:
        content_analyzer.detect_bias.return_value = [Flag(FlagType.CLICKBAIT, 0.8, "headline")]
        fact_checker = MagicMock()
        fact_checker.check_facts = AsyncMock(
            return_value=[Flag(FlagType.UNVERIFIED, 0.5, "no source")]
        )
        fact_checker.get_source_reputation = AsyncMock(return_value=0.8)
        service._fact_checker = fact_checker

        await service.analyze_article(stored)

        assert [(f.type, f.detected_by) for f in stored.flags] == [
            (FlagType.CLICKBAIT, "bias_detector"),
            (FlagType.UNVERIFIED, "fact_checker"),
        ]
        assert stored.status == ArticleStatus.FLAGGED
        assert stored.score == pytest.approx(0.76)
        publisher.publish_article_analyzed.assert_awaited_once()
        publisher.publish_article_flagged.assert_awaited_once()

    async def test_score_uses_source_reputation_and_sentiment(
        self, service: ArticleAnalyzerService, stored: Article, content_analyzer: MagicMock
    ) -> None:
        content_analyzer.analyze_sentiment.return_value = 1.0
        service._fact_checker = NoOpFactChecker(reputation=0.5)
        await service.analyze_article(stored)
        assert stored.score == pytest.approx(0.6)

    async def test_step_failure_raises_and_persists_nothing(
        self,
        service: ArticleAnalyzerService,
        repository: InMemoryArticleRepository,
        stored: Article,
        content_analyzer: MagicMock,
        publisher: MagicMock,
    ) -> None:
        content_analyzer.detect_bias.side_effect = RuntimeError("model overloaded")

        with pytest.raises(AnalysisError, match="failed to detect bias: model overloaded") as exc:
            await service.analyze_article(stored)

        assert exc.value.step == "detect bias"
        content_analyzer.detect_language.assert_not_awaited()
        persisted = await repository.find_by_id(stored.id)
        assert persisted is not None
        assert persisted.status == ArticleStatus.PENDING
        assert persisted.score == 0.0
        publisher.publish_article_analyzed.assert_not_awaited()

    async def test_unsaved_article_raises_not_found(
        self, service: ArticleAnalyzerService, article: Article
    ) -> None:
        with pytest.raises(ArticleNotFoundError):
            await service.analyze_article(article)

    async def test_cache_and_event_failures_are_ignored(
        self,
        repository: InMemoryArticleRepository,
        content_analyzer: MagicMock,
        stored: Article,
    ) -> None:
        cache = MagicMock()
        cache.set = AsyncMock(side_effect=ConnectionError("redis down"))
        publisher = MagicMock()
        publisher.publish_article_analyzed = AsyncMock(side_effect=ConnectionError("down"))
        publisher.publish_article_flagged = AsyncMock()
        service = ArticleAnalyzerService(
            repository=repository,
            cache=cache,
            fact_checker=NoOpFactChecker(),
            content_analyzer=content_analyzer,
            event_publisher=publisher,
        )
        await repository.save(stored)

        await service.analyze_article(stored)

        persisted = await repository.find_by_id(stored.id)
        assert persisted is not None
        assert persisted.status == ArticleStatus.ANALYZED

    async def test_result_is_cached(
        self, service: ArticleAnalyzerService, cache: InMemoryArticleCache, stored: Article
    ) -> None:
        await service.analyze_article(stored)
        cached = await cache.get(stored.id)
        assert cached is not None
        assert cached.status == ArticleStatus.ANALYZED

    async def test_run_log_written(
        self,
        repository: InMemoryArticleRepository,
        cache: InMemoryArticleCache,
        publisher: MagicMock,
        article: Article,
        tmp_path: Path,
    ) -> None:
        service = ArticleAnalyzerService(
            repository=repository,
            cache=cache,
            fact_checker=NoOpFactChecker(),
            content_analyzer=NoOpContentAnalyzer(),
            event_publisher=publisher,
            run_log_dir=tmp_path,
        )
        await service.create_article(article)
        await service.analyze_article(article)

        (log_file,) = tmp_path.glob("run_*.json")
        data = json.loads(log_file.read_text())
        assert [s["step"] for s in data["steps"]] == [
            "analyze_sentiment",
            "extract_entities",
            "detect_bias",
            "check_facts",
            "get_source_reputation",
            "detect_language",
        ]
        assert data["status"] == "ANALYZED"
        assert data["steps"][3]["component"] == "NoOpFactChecker"

    async def test_run_log_write_failure_keeps_result(
        self,
        service: ArticleAnalyzerService,
        repository: InMemoryArticleRepository,
        stored: Article,
        tmp_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        not_a_dir = tmp_path / "runs"
        not_a_dir.write_text("")
        service._run_log_dir = not_a_dir

        await service.analyze_article(stored)

        persisted = await repository.find_by_id(stored.id)
        assert persisted is not None
        assert persisted.status == ArticleStatus.ANALYZED
        assert f"Failed to write run log for article {stored.id}" in caplog.text

    async def test_run_log_write_failure_keeps_analysis_error(
        self,
        service: ArticleAnalyzerService,
        stored: Article,
        content_analyzer: MagicMock,
        tmp_path: Path,
    ) -> None:
        not_a_dir = tmp_path / "runs"
        not_a_dir.write_text("")
        service._run_log_dir = not_a_dir
        content_analyzer.detect_language.side_effect = RuntimeError("timeout")

        with pytest.raises(AnalysisError, match="failed to detect language: timeout"):
            await service.analyze_article(stored)


class TestGetAnalysisResult:
    async def test_prefers_cache(
        self,
        service: ArticleAnalyzerService,
        repository: InMemoryArticleRepository,
        cache: InMemoryArticleCache,
        stored: Article,
    ) -> None:
        stale = Article.new("cached title", "c", "s", "a")
        stale.id = stored.id
        await cache.set(stale)

        result = await service.get_analysis_result(stored.id)
        assert result.title == "cached title"

    async def test_falls_back_to_repository_and_fills_cache(
        self, service: ArticleAnalyzerService, cache: InMemoryArticleCache, stored: Article
    ) -> None:
        assert await cache.get(stored.id) is None
        result = await service.get_analysis_result(stored.id)
        assert result.id == stored.id
        assert await cache.get(stored.id) is not None

    async def test_cache_error_is_a_miss(
        self, service: ArticleAnalyzerService, stored: Article
    ) -> None:
        broken = MagicMock()
        broken.get = AsyncMock(side_effect=ConnectionError("redis down"))
        broken.set = AsyncMock(side_effect=ConnectionError("redis down"))
        service._cache = broken
        result = await service.get_analysis_result(stored.id)
        assert result.id == stored.id

    async def test_missing_raises(self, service: ArticleAnalyzerService) -> None:
        with pytest.raises(ArticleNotFoundError):
            await service.get_analysis_result("missing")


class TestReprocessArticle:
    async def test_clears_previous_results(
        self,
        service: ArticleAnalyzerService,
        repository: InMemoryArticleRepository,
        stored: Article,
        content_analyzer: MagicMock,
    ) -> None:
        content_analyzer.detect_bias.return_value = [Flag(FlagType.SPAM, 0.9)]
        await service.analyze_article(stored)
        assert stored.status == ArticleStatus.FLAGGED

        content_analyzer.detect_bias.return_value = []
        result = await service.reprocess_article(stored.id)

        assert result.flags == []
        assert result.status == ArticleStatus.ANALYZED
        persisted = await repository.find_by_id(stored.id)
        assert persisted is not None
        assert persisted.flags == []

    async def test_missing_raises(self, service: ArticleAnalyzerService) -> None:
        with pytest.raises(ArticleNotFoundError):
            await service.reprocess_article("missing")


# -- Management --


class TestManagement:
    async def test_create_and_get(self, service: ArticleAnalyzerService, stored: Article) -> None:
        found = await service.get_article(stored.id)
        assert found.title == stored.title

    async def test_get_missing_raises(self, service: ArticleAnalyzerService) -> None:
        with pytest.raises(ArticleNotFoundError, match="article not found: nope"):
            await service.get_article("nope")

    async def test_update_status_invalidates_cache(
        self, service: ArticleAnalyzerService, cache: InMemoryArticleCache, stored: Article
    ) -> None:
        await service.analyze_article(stored)
        assert await cache.get(stored.id) is not None

        updated = await service.update_article_status(stored.id, ArticleStatus.VERIFIED)

        assert updated.status == ArticleStatus.VERIFIED
        assert await cache.get(stored.id) is None
        assert (await service.get_article(stored.id)).status == ArticleStatus.VERIFIED

    async def test_list_flagged(
        self, service: ArticleAnalyzerService, stored: Article, content_analyzer: MagicMock
    ) -> None:
        assert await service.list_flagged_articles(10, 0) == []
        content_analyzer.detect_bias.return_value = [Flag(FlagType.BIASED, 0.7)]
        await service.analyze_article(stored)
        flagged = await service.list_flagged_articles(10, 0)
        assert [a.id for a in flagged] == [stored.id]


def test_protocol_compliance(service: ArticleAnalyzerService) -> None:
    analyzer: ArticleAnalyzer = service
    manager: ArticleManager = service
    assert analyzer is manager
