"""Content Enrichment Module

Turns one article's text into an ``EnrichmentResult`` by prompting a
generative model and extracting the JSON it returns.

``ContentEnricher.enrich`` never raises: invalid input, empty model
responses, unparseable output and SDK errors (network, auth, rate limit)
all degrade to the default result so a single bad record cannot abort a
batch. Failed calls are not retried.
"""

import logging
from typing import Any, Optional

from .exceptions import ExtractionError, ModelResponseError
from .extractor import extract
from .model_clients import ModelClient
from .models import Category, EnrichmentResult, Sentiment, Unrecognized

logger = logging.getLogger(__name__)

CATEGORY_CHOICES = ", ".join(c.value for c in Category)
SENTIMENT_CHOICES = "{}, {}, or {}".format(*(s.value for s in Sentiment))

PROMPT_TEMPLATE = """\
You are an expert content analyzer. For the following text, perform the following tasks:
1. Summarize the content concisely, in about 2-3 sentences.
2. Identify 5-7 main keywords or tags that accurately describe the content. \
Provide them as a comma-separated list.
3. Categorize the content into one of these broad categories: {categories}. \
If none fit perfectly, use '{fallback}'.
4. Based on the overall tone, assign a sentiment: {sentiments}.

Provide the output in a JSON format with keys: "summary", "keywords", "category", "sentiment".

Content:
---
{content}
---
"""


def build_prompt(content: str) -> str:
    """Embed article content verbatim in the fixed analysis instructions."""
    return PROMPT_TEMPLATE.format(
        categories=CATEGORY_CHOICES,
        fallback=Category.GENERAL.value,
        sentiments=SENTIMENT_CHOICES,
        content=content,
    )


class ContentEnricher:
    """Enriches article content with summary, keywords, category and sentiment.

    Args:
        model_client: Any object satisfying the ``ModelClient`` protocol
    """

    def __init__(self, model_client: ModelClient):
        self.model_client = model_client

    def enrich(self, content: Any, record_id: Optional[Any] = None) -> EnrichmentResult:
        """Enrich a single article's content.

        Args:
            content: Article text; anything other than a non-empty string
                is skipped without calling the model
            record_id: Identifier used only for log messages

        Returns:
            EnrichmentResult, all-default when enrichment was skipped or failed
        """
        if not content or not isinstance(content, str):
            logger.warning(
                "Skipping enrichment for objectID %s: invalid content provided",
                record_id,
            )
            return EnrichmentResult.default()

        prompt = build_prompt(content)

        try:
            logger.info("Sending content for enrichment (ID: %s)", record_id)
            raw_text = self.model_client.generate(prompt)
            result = extract(raw_text)
        except ModelResponseError as exc:
            logger.error("No usable model output for objectID %s: %s", record_id, exc)
            return EnrichmentResult.default()
        except ExtractionError as exc:
            logger.warning("Could not extract metadata for objectID %s: %s", record_id, exc)
            return EnrichmentResult.default()
        except Exception:
            logger.exception("Error enriching content for objectID %s", record_id)
            return EnrichmentResult.default()

        self._log_label_drift(result, record_id)
        logger.info("Enrichment successful for ID: %s", record_id)
        return result

    @staticmethod
    def _log_label_drift(result: EnrichmentResult, record_id: Optional[Any]) -> None:
        for field, label in (
            ("category", result.category_label),
            ("sentiment", result.sentiment_label),
        ):
            if isinstance(label, Unrecognized):
                logger.warning(
                    "Model returned unrecognized %s %r for objectID %s",
                    field,
                    label.text,
                    record_id,
                )
