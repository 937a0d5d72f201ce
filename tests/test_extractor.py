# tests/test_extractor.py

import pytest

from article_enrichment.exceptions import ExtractionError
from article_enrichment.extractor import extract, strip_code_fence
from article_enrichment.models import EnrichmentResult


PAYLOAD = (
    '{"summary":"Solar costs dropped.","keywords":"solar,energy,cost",'
    '"category":"Environment","sentiment":"Positive"}'
)

EXPECTED = EnrichmentResult(
    summary="Solar costs dropped.",
    keywords=["solar", "energy", "cost"],
    category="Environment",
    sentiment="Positive",
)


# --- decoration tolerance ----------------------------------------------------


@pytest.mark.parametrize(
    "raw",
    [
        PAYLOAD,
        f"```json\n{PAYLOAD}\n```",
        f"```\n{PAYLOAD}\n```",
        f"  ```json\n{PAYLOAD}\n```\n",
        f"Here is the analysis you asked for:\n\n{PAYLOAD}\n\nLet me know if you need more.",
        f"Based on the text:\n```json\n{PAYLOAD}\n```\nThis reflects the overall tone.",
    ],
)
def test_extract_recovers_same_payload_regardless_of_decoration(raw):
    """Fences and surrounding prose should not change the extracted result."""
    assert extract(raw) == EXPECTED


def test_extract_handles_pretty_printed_json():
    raw = """```json
{
  "summary": "Hospitals trial AI triage.",
  "keywords": "AI, hospitals , triage,  healthcare",
  "category": "Healthcare",
  "sentiment": "Neutral"
}
```"""
    result = extract(raw)

    assert result.summary == "Hospitals trial AI triage."
    assert result.keywords == ["AI", "hospitals", "triage", "healthcare"]
    assert result.category == "Healthcare"
    assert result.sentiment == "Neutral"


def test_strip_code_fence_leaves_plain_text_untouched():
    assert strip_code_fence('  {"a": 1}  ') == '{"a": 1}'


# --- normalization -----------------------------------------------------------


def test_extract_missing_keys_use_defaults():
    """Missing fields become None / empty list rather than failing."""
    result = extract('{"summary": "Only a summary."}')

    assert result.summary == "Only a summary."
    assert result.keywords == []
    assert result.category is None
    assert result.sentiment is None


def test_extract_empty_summary_is_treated_as_absent():
    result = extract('{"summary": "", "keywords": "", "category": "", "sentiment": null}')

    assert result.is_default


def test_extract_keywords_as_json_list():
    result = extract('{"keywords": [" solar ", "energy", null]}')

    assert result.keywords == ["solar", "energy"]


def test_extract_keywords_keeps_every_fragment_in_order():
    """Each comma-separated element is trimmed; none are dropped."""
    result = extract('{"keywords": "solar,, energy ,"}')

    assert result.keywords == ["solar", "", "energy", ""]


def test_extract_keywords_unsupported_type_raises():
    with pytest.raises(ExtractionError, match="keywords"):
        extract('{"keywords": {"primary": "solar"}}')


def test_extract_does_not_validate_labels():
    """Out-of-set labels are passed through as raw text."""
    result = extract('{"category": "Sports", "sentiment": "Mixed"}')

    assert result.category == "Sports"
    assert result.sentiment == "Mixed"


# --- failures ----------------------------------------------------------------


@pytest.mark.parametrize(
    "raw",
    [
        "The article discusses solar energy and its falling costs.",
        "",
        "} reversed braces {",
        "{ no closing brace",
        "no opening brace }",
    ],
)
def test_extract_without_brace_pair_raises(raw):
    with pytest.raises(ExtractionError, match="Could not find valid JSON boundaries"):
        extract(raw)


def test_extract_invalid_json_between_braces_raises():
    with pytest.raises(ExtractionError, match="Invalid JSON") as excinfo:
        extract("```json\n{summary: 'single quotes are not JSON'}\n```")

    # original decode error kept for diagnostics
    assert excinfo.value.__cause__ is not None


def test_extract_error_message_truncates_long_text():
    raw = "x" * 1000

    with pytest.raises(ExtractionError) as excinfo:
        extract(raw)

    message = str(excinfo.value)
    assert "x" * 200 in message
    assert "x" * 201 not in message


@pytest.mark.parametrize(
    "raw",
    [
        '{"summary": "ok", "n": ' + "1" * 5000 + "}",
        '{"a": ' + "[" * 100000 + "]" * 100000 + "}",
    ],
    ids=["oversized-int", "deep-nesting"],
)
def test_extract_decoder_limits_raise_extraction_error(raw):
    with pytest.raises(ExtractionError, match="Unparseable JSON") as excinfo:
        extract(raw)

    assert isinstance(excinfo.value.__cause__, (ValueError, RecursionError))
