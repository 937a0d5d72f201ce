"""Response Extraction Module

Pulls the JSON payload out of free-text model output and normalizes it
into an ``EnrichmentResult``.

Generative models do not reliably return bare JSON: replies are often
wrapped in markdown code fences or surrounded by prose. Extraction is
tolerant of that decoration but raises ``ExtractionError`` when no
parseable object can be found, instead of returning garbage.

Category and sentiment are passed through as raw text; checking them
against the closed label sets is left to ``EnrichmentResult``.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional

from .exceptions import ExtractionError
from .models import EnrichmentResult

logger = logging.getLogger(__name__)

# ```json ... ``` fences around the whole reply
LEADING_FENCE = re.compile(r"^\s*```[a-zA-Z]*[ \t]*\n?")
TRAILING_FENCE = re.compile(r"\n?```\s*$")

PREVIEW_CHARS = 200


def strip_code_fence(text: str) -> str:
    """Remove a leading and trailing markdown code fence, if present."""
    text = LEADING_FENCE.sub("", text, count=1)
    text = TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def _preview(text: str) -> str:
    if len(text) <= PREVIEW_CHARS:
        return text
    return text[:PREVIEW_CHARS] + "..."


def _as_text(value: Any) -> Optional[str]:
    if not value:
        return None
    if isinstance(value, str):
        return value
    return str(value)


def _split_keywords(value: Any) -> List[str]:
    """Normalize the keywords field to an ordered list of trimmed strings.

    Accepts the requested comma-separated string as well as a JSON list.
    Every fragment is kept in order, so "a,,b" yields ["a", "", "b"].
    """
    if not value:
        return []
    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, list):
        parts = [str(item) for item in value if item is not None]
    else:
        raise ExtractionError(
            f"Unsupported type for 'keywords': {type(value).__name__}"
        )
    return [part.strip() for part in parts]


def normalize_payload(payload: Dict[str, Any]) -> EnrichmentResult:
    """Convert a parsed JSON object into an ``EnrichmentResult``."""
    return EnrichmentResult(
        summary=_as_text(payload.get("summary")),
        keywords=_split_keywords(payload.get("keywords")),
        category=_as_text(payload.get("category")),
        sentiment=_as_text(payload.get("sentiment")),
    )


def extract(raw_text: str) -> EnrichmentResult:
    """Extract and normalize the structured payload from model output.

    Steps:
    1. Strip a wrapping markdown code fence (best effort)
    2. Slice from the first '{' to the last '}'
    3. Parse the slice as a JSON object
    4. Normalize summary / keywords / category / sentiment

    Args:
        raw_text: Raw text returned by the model

    Returns:
        Normalized EnrichmentResult

    Raises:
        ExtractionError: If no brace-delimited JSON object can be parsed
    """
    cleaned = strip_code_fence(raw_text or "")

    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end == -1 or end <= start:
        raise ExtractionError(
            f'Could not find valid JSON boundaries in model response: "{_preview(cleaned)}"'
        )

    json_string = cleaned[start : end + 1]
    try:
        payload = json.loads(json_string)
    except json.JSONDecodeError as exc:
        raise ExtractionError(
            f'Invalid JSON in model response ({exc.msg}): "{_preview(json_string)}"'
        ) from exc
    except (ValueError, RecursionError) as exc:
        raise ExtractionError(
            f'Unparseable JSON in model response ({exc}): "{_preview(json_string)}"'
        ) from exc

    if not isinstance(payload, dict):
        raise ExtractionError(
            f"Model response JSON is not an object (got {type(payload).__name__})"
        )

    logger.debug("Extracted payload keys: %s", sorted(payload))
    return normalize_payload(payload)
