"""Model Client Module

Provider adapters for the generative-text model used by the enricher.
Each adapter exposes ``generate(prompt) -> str`` and validates the
provider's response shape, raising ``ModelResponseError`` when the model
produced no usable text. Transport, auth and rate-limit errors from the
SDKs propagate unchanged; the enricher decides how to degrade.

Clients are built once per process by ``build_model_client`` and injected
into the enricher, so tests can substitute a stub.
"""

import logging
from typing import Any, Optional, Protocol, runtime_checkable

from google import genai
from openai import OpenAI

from .config import Settings
from .exceptions import ConfigurationError, ModelResponseError

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_OPENAI_MODEL = "gpt-4.1-nano"


@runtime_checkable
class ModelClient(Protocol):
    """Protocol all model adapters must satisfy."""

    model: str

    def generate(self, prompt: str) -> str: ...


class GeminiModelClient:
    """Adapter for Google's Gemini models via the ``google-genai`` SDK."""

    def __init__(self, client: Any, model: str = DEFAULT_GEMINI_MODEL):
        self._client = client
        self.model = model

    def generate(self, prompt: str) -> str:
        response = self._client.models.generate_content(
            model=self.model,
            contents=[{"role": "user", "parts": [{"text": prompt}]}],
        )
        text = self._first_candidate_text(response)
        if text:
            return text

        logger.warning("Unexpected Gemini response structure: %r", response)
        prompt_feedback = getattr(response, "prompt_feedback", None)
        safety_ratings = getattr(prompt_feedback, "safety_ratings", None)
        if safety_ratings:
            logger.error("Gemini prompt feedback safety ratings: %r", safety_ratings)
        raise ModelResponseError("Gemini API did not return a valid text candidate")

    @staticmethod
    def _first_candidate_text(response: Any) -> Optional[str]:
        """Return candidates[0].content.parts[0].text, or None if any link is missing."""
        candidates = getattr(response, "candidates", None)
        if not candidates:
            return None
        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None)
        if not parts:
            return None
        return getattr(parts[0], "text", None) or None


class OpenAIModelClient:
    """Adapter for OpenAI chat models."""

    def __init__(self, client: Any, model: str = DEFAULT_OPENAI_MODEL):
        self._client = client
        self.model = model

    def generate(self, prompt: str) -> str:
        response = self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
        )
        choices = getattr(response, "choices", None)
        if choices:
            message = getattr(choices[0], "message", None)
            content = getattr(message, "content", None)
            if content:
                return content

        logger.warning("Unexpected OpenAI response structure: %r", response)
        raise ModelResponseError("OpenAI API did not return any message content")


def build_model_client(settings: Settings) -> ModelClient:
    """Construct the configured model adapter.

    Raises:
        ConfigurationError: If the provider is unknown or its API key is missing
    """
    if settings.provider == "gemini":
        if not settings.gemini_api_key:
            raise ConfigurationError("GEMINI_API_KEY is required for the gemini provider")
        return GeminiModelClient(
            genai.Client(api_key=settings.gemini_api_key),
            model=settings.model or DEFAULT_GEMINI_MODEL,
        )

    if settings.provider == "openai":
        if not settings.openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY is required for the openai provider")
        return OpenAIModelClient(
            OpenAI(api_key=settings.openai_api_key),
            model=settings.model or DEFAULT_OPENAI_MODEL,
        )

    raise ConfigurationError(
        f"Unknown MODEL_PROVIDER '{settings.provider}' (expected 'gemini' or 'openai')"
    )
