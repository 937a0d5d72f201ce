"""Pipeline Exceptions Module

Exception types for the distinct failure modes of the enrichment pipeline.
Per-record failures (model, extraction) are contained by the enricher;
source failures are contained by the batch processor; publish and
configuration failures surface to the CLI.
"""

from typing import Optional


class EnrichmentPipelineError(Exception):
    """Base exception for all enrichment pipeline errors."""

    def __init__(self, message: str, record_id: Optional[str] = None):
        self.message = message
        self.record_id = record_id

        error_parts = [message]
        if record_id is not None:
            error_parts.append(f"Record: {record_id}")

        super().__init__(" | ".join(error_parts))


class SourceLoadError(EnrichmentPipelineError):
    """Raised when the input collection cannot be read or parsed."""
    pass


class ModelResponseError(EnrichmentPipelineError):
    """Raised when the model returns no usable text output."""
    pass


class ExtractionError(EnrichmentPipelineError):
    """Raised when model output holds no parseable structured payload."""
    pass


class PublishError(EnrichmentPipelineError):
    """Raised when the search index rejects or loses an upload."""
    pass


class ConfigurationError(EnrichmentPipelineError):
    """Raised when required settings or credentials are missing."""
    pass
