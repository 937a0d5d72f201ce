"""Configuration Module

Runtime settings for the enrichment pipeline, read from the process
environment and an optional ``.env`` file.

Environment variables:
  MODEL_PROVIDER: 'gemini' (default) or 'openai'
  MODEL_NAME: Model identifier (defaults to the provider's default model)
  GEMINI_API_KEY: API key for Google Gemini
  OPENAI_API_KEY: API key for OpenAI
  ALGOLIA_APP_ID: Algolia application id
  ALGOLIA_ADMIN_API_KEY: Algolia admin API key (write access)
  ALGOLIA_INDEX_NAME: Target index (default: articles_enriched_by_ai)
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_PROVIDER = "gemini"
DEFAULT_INDEX_NAME = "articles_enriched_by_ai"


class Settings(BaseModel):
    provider: str = DEFAULT_PROVIDER
    model: Optional[str] = None
    gemini_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    algolia_app_id: Optional[str] = None
    algolia_admin_api_key: Optional[str] = None
    index_name: str = DEFAULT_INDEX_NAME

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Settings":
        """Build settings from environment variables.

        Values already present in the environment take precedence over
        those in the ``.env`` file.
        """
        load_dotenv(dotenv_path=env_file, override=False)
        return cls(
            provider=os.getenv("MODEL_PROVIDER", DEFAULT_PROVIDER).strip().lower(),
            model=os.getenv("MODEL_NAME") or None,
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            algolia_app_id=os.getenv("ALGOLIA_APP_ID") or None,
            algolia_admin_api_key=os.getenv("ALGOLIA_ADMIN_API_KEY") or None,
            index_name=os.getenv("ALGOLIA_INDEX_NAME") or DEFAULT_INDEX_NAME,
        )
