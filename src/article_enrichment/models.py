"""Data Models Module

Defines the Pydantic model for AI-derived article metadata, the closed
label sets the model is asked to choose from, and the helpers that merge
metadata onto an article record.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel

AI_SUMMARY = "ai_summary"
AI_KEYWORDS = "ai_keywords"
AI_CATEGORY = "ai_category"
AI_SENTIMENT = "ai_sentiment"

AI_FIELDS = (AI_SUMMARY, AI_KEYWORDS, AI_CATEGORY, AI_SENTIMENT)


class Category(str, Enum):
    TECHNOLOGY = "Technology"
    ENVIRONMENT = "Environment"
    HEALTHCARE = "Healthcare"
    BUSINESS = "Business"
    EDUCATION = "Education"
    SCIENCE = "Science"
    ARTS_AND_CULTURE = "Arts & Culture"
    GENERAL = "General"


class Sentiment(str, Enum):
    POSITIVE = "Positive"
    NEUTRAL = "Neutral"
    NEGATIVE = "Negative"


@dataclass(frozen=True)
class Unrecognized:
    """A label returned by the model that is outside the closed set."""
    text: str


Label = Union[Category, Sentiment, Unrecognized]


def classify_label(value: Optional[str], label_type: Type[Enum]) -> Optional[Label]:
    """Map raw model text onto a closed label set.

    Matching is exact after trimming surrounding whitespace. Anything else
    is returned as ``Unrecognized`` rather than coerced to a nearby label.

    Args:
        value: Raw label text from the model (may be None)
        label_type: ``Category`` or ``Sentiment``

    Returns:
        Enum member, ``Unrecognized(value)``, or None when value is absent
    """
    if value is None:
        return None
    try:
        return label_type(value.strip())
    except ValueError:
        return Unrecognized(value)


class EnrichmentResult(BaseModel):
    """AI metadata for a single article.

    The all-default instance (no summary, no keywords, no labels) is what
    a failed or skipped enrichment produces; there is no partial-failure
    signal beyond these defaults.
    """
    summary: Optional[str] = None
    keywords: List[str] = []
    category: Optional[str] = None
    sentiment: Optional[str] = None

    @classmethod
    def default(cls) -> "EnrichmentResult":
        return cls()

    @property
    def is_default(self) -> bool:
        return (
            self.summary is None
            and not self.keywords
            and self.category is None
            and self.sentiment is None
        )

    @property
    def category_label(self) -> Optional[Label]:
        return classify_label(self.category, Category)

    @property
    def sentiment_label(self) -> Optional[Label]:
        return classify_label(self.sentiment, Sentiment)

    def to_record_fields(self) -> Dict[str, Any]:
        """Return the four ``ai_*`` fields merged onto enriched records."""
        return {
            AI_SUMMARY: self.summary,
            AI_KEYWORDS: list(self.keywords),
            AI_CATEGORY: self.category,
            AI_SENTIMENT: self.sentiment,
        }


def merge_enrichment(record: Dict[str, Any], result: EnrichmentResult) -> Dict[str, Any]:
    """Build an enriched record: a copy of ``record`` plus the ``ai_*`` fields.

    The input record is left untouched.
    """
    return {**record, **result.to_record_fields()}
