from article_enrichment.models import (
    AI_FIELDS,
    Category,
    EnrichmentResult,
    Sentiment,
    Unrecognized,
    classify_label,
    merge_enrichment,
)


def test_default_result_is_all_empty():
    result = EnrichmentResult.default()

    assert result.is_default
    assert result.to_record_fields() == {
        "ai_summary": None,
        "ai_keywords": [],
        "ai_category": None,
        "ai_sentiment": None,
    }


def test_classify_label_known_values():
    assert classify_label("Arts & Culture", Category) is Category.ARTS_AND_CULTURE
    assert classify_label(" Negative ", Sentiment) is Sentiment.NEGATIVE


def test_classify_label_does_not_coerce_drift():
    """Near-misses are reported as Unrecognized, not mapped to a label."""
    assert classify_label("technology", Category) == Unrecognized("technology")
    assert classify_label("Mixed", Sentiment) == Unrecognized("Mixed")


def test_classify_label_absent_is_none():
    assert classify_label(None, Category) is None


def test_result_label_properties():
    result = EnrichmentResult(category="Science", sentiment="Upbeat")

    assert result.category_label is Category.SCIENCE
    assert result.sentiment_label == Unrecognized("Upbeat")
    assert not result.is_default


def test_merge_enrichment_copies_record_and_adds_ai_fields():
    record = {"objectID": "7", "content": "Some text", "title": "T"}
    result = EnrichmentResult(summary="S", keywords=["a"], category="General", sentiment="Neutral")

    merged = merge_enrichment(record, result)

    assert merged is not record
    assert record == {"objectID": "7", "content": "Some text", "title": "T"}
    assert merged["title"] == "T"
    assert all(field in merged for field in AI_FIELDS)
    assert merged["ai_keywords"] == ["a"]


def test_merge_enrichment_keywords_are_not_shared():
    result = EnrichmentResult(keywords=["a", "b"])

    merged = merge_enrichment({"objectID": "1"}, result)
    merged["ai_keywords"].append("c")

    assert result.keywords == ["a", "b"]
