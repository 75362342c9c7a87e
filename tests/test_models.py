"""Tests for the article data model."""

from datetime import UTC

from reality_filter.data import (
    Article,
    ArticleMetadata,
    ArticleStatus,
    Entity,
    EntityType,
    FlagType,
)


class TestArticle:
    """Tests for Article construction and mutators."""

    def test_new_article_is_pending(self, article: Article) -> None:
        assert article.status == ArticleStatus.PENDING
        assert article.score == 0.0
        assert article.flags == []
        assert article.metadata == ArticleMetadata()
        assert article.created_at == article.updated_at
        assert article.created_at.tzinfo is UTC

    def test_new_articles_get_distinct_ids(self) -> None:
        a = Article.new("t", "c", "s", "a")
        b = Article.new("t", "c", "s", "a")
        assert a.id != b.id
        assert a.tags == []

    def test_new_copies_tags(self) -> None:
        tags = ["one"]
        article = Article.new("t", "c", "s", "a", tags)
        tags.append("two")
        assert article.tags == ["one"]

    def test_add_flag_marks_flagged(self, article: Article) -> None:
        before = article.updated_at
        flag = article.add_flag(FlagType.CLICKBAIT, 0.7, "all caps headline", "bias_detector")

        assert article.flags == [flag]
        assert flag.detected_by == "bias_detector"
        assert flag.detected_at.tzinfo is UTC
        assert article.status == ArticleStatus.FLAGGED
        assert article.is_flagged
        assert article.updated_at >= before

    def test_update_score_and_status(self, article: Article) -> None:
        article.update_score(0.42)
        article.update_status(ArticleStatus.VERIFIED)
        assert article.score == 0.42
        assert article.status == ArticleStatus.VERIFIED

    def test_update_metadata(self, article: Article) -> None:
        metadata = ArticleMetadata(
            entities=[Entity(EntityType.PLACE, "Springfield")],
            sentiment=0.6,
            language="en",
            word_count=12,
            reading_time=1,
        )
        article.update_metadata(metadata)
        assert article.metadata is metadata

    def test_reset_analysis(self, article: Article) -> None:
        article.add_flag(FlagType.SPAM, 0.9, "", "bias_detector")
        article.update_score(0.3)
        article.update_metadata(ArticleMetadata(sentiment=0.9, language="en"))

        article.reset_analysis()

        assert article.flags == []
        assert article.score == 0.0
        assert article.status == ArticleStatus.PENDING
        assert article.metadata == ArticleMetadata()
        assert not article.is_flagged


def test_enum_values_are_uppercase() -> None:
    assert ArticleStatus.FLAGGED.value == "FLAGGED"
    assert FlagType.FACTUAL_ERROR.value == "FACTUAL_ERROR"
    assert EntityType.ORGANIZATION.value == "ORGANIZATION"
    assert len(FlagType) == 7
