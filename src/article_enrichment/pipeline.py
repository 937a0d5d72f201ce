"""
Article Enrichment Pipeline

This module loads article records, enriches each one with AI-generated
metadata, and hands the enriched collection to a search index publisher.

Features:
- Strictly sequential enrichment (output order == input order)
- Per-record failure isolation (a failed record gets default metadata)
- Unreadable source treated as "nothing to publish", not a crash
- Optional timestamped JSON output and run metadata
- Step timing and structured logging
"""

from pathlib import Path
import json
from typing import List, Dict, Any, Optional, Tuple
import logging
import time
from datetime import datetime

from .enricher import ContentEnricher
from .exceptions import SourceLoadError
from .loaders import load_articles
from .models import merge_enrichment, AI_SUMMARY, AI_KEYWORDS, AI_CATEGORY, AI_SENTIMENT
from .publisher import AlgoliaPublisher


logger = logging.getLogger(__name__)

DEFAULT_ID_FIELD = "objectID"
DEFAULT_CONTENT_FIELD = "content"


def process_articles(
    source: Path | str,
    enricher: ContentEnricher,
    *,
    id_field: str = DEFAULT_ID_FIELD,
    content_field: str = DEFAULT_CONTENT_FIELD,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Load records from `source` and enrich each one, in order.

    Every call re-reads the source, so repeated calls over an unchanged
    file (with a deterministic model) produce identical output.

    Args:
        source: Path to the JSON file of article records
        enricher: ContentEnricher used for every record
        id_field: Record key holding the identifier (used for logging)
        content_field: Record key holding the text to enrich
        limit: Maximum records to enrich (None = all)

    Returns:
        One enriched record per input record, in input order. An empty
        list if the source could not be loaded.
    """
    t0 = time.time()
    try:
        articles = load_articles(source)
    except SourceLoadError as exc:
        logger.error("Error processing articles from %s: %s", source, exc)
        return []

    logger.info("✓ Loaded %d records from %s in %.2fs", len(articles), source, time.time() - t0)

    if limit is not None:
        logger.info("Applying limit: %d records", limit)
        articles = articles[:limit]

    enriched: List[Dict[str, Any]] = []
    log_interval = max(1, len(articles) // 10)

    for idx, article in enumerate(articles, start=1):
        result = enricher.enrich(article.get(content_field), article.get(id_field))
        enriched.append(merge_enrichment(article, result))

        if idx == 1 or idx == len(articles) or idx % log_interval == 0:
            logger.info(
                "Enrichment progress: %d/%d (%.1f%%)",
                idx,
                len(articles),
                (idx / len(articles)) * 100,
            )

    return enriched


def count_with_metadata(records: List[Dict[str, Any]]) -> int:
    """Count records where at least one ai_* field is non-default."""
    return sum(
        1
        for r in records
        if r.get(AI_SUMMARY) is not None
        or r.get(AI_KEYWORDS)
        or r.get(AI_CATEGORY) is not None
        or r.get(AI_SENTIMENT) is not None
    )


def run_pipeline(
    input_path: Path | str,
    enricher: ContentEnricher,
    publisher: Optional[AlgoliaPublisher] = None,
    *,
    output_dir: Path | str | None = None,
    limit: Optional[int] = None,
    dry_run: bool = False,
    keep_history: bool = True,
) -> Tuple[int, int, Dict[str, Path]]:
    """
    Run enrichment end-to-end and publish the result.

    Pipeline Steps:
    1. Load and enrich records (sequential, failure-isolated)
    2. Save enriched records to JSON (only if output_dir is given)
    3. Publish to the search index (skipped on dry run or without publisher)

    Args:
        input_path: Path to the JSON file of article records
        enricher: ContentEnricher used for every record
        publisher: Index publisher; None skips publishing
        output_dir: Directory for enriched JSON and run metadata
        limit: Maximum records to process (None = all)
        dry_run: Enrich only; write no files and publish nothing
        keep_history: Timestamp output filenames instead of overwriting

    Returns:
        Tuple of (enriched_records, records_with_metadata, output_paths_dict)

    Raises:
        PublishError: If publishing to the index fails
    """
    run_timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    job_start = time.time()
    output_paths: Dict[str, Path] = {}

    # ========== STEP 1: LOAD & ENRICH ==========
    t0 = time.time()
    logger.info("STEP 1/3: Loading and enriching records from %s", input_path)
    enriched = process_articles(input_path, enricher, limit=limit)
    with_metadata = count_with_metadata(enriched)

    if not enriched:
        logger.warning("No articles were enriched. Nothing to publish.")
        return 0, 0, output_paths

    logger.info(
        "✓ Enriched %d records in %.2fs (with metadata=%d, defaulted=%d)",
        len(enriched),
        time.time() - t0,
        with_metadata,
        len(enriched) - with_metadata,
    )

    if dry_run:
        logger.info("DRY RUN: skipping output files and index publishing")
        return len(enriched), with_metadata, output_paths

    # ========== STEP 2: SAVE ENRICHED RECORDS ==========
    if output_dir is not None:
        t1 = time.time()
        logger.info("STEP 2/3: Saving enriched records")
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        filename = f"enriched_{run_timestamp}.json" if keep_history else "enriched.json"
        enriched_path = output_dir / filename
        try:
            with enriched_path.open("w", encoding="utf-8") as f:
                json.dump(enriched, f, ensure_ascii=False, indent=2)
        except Exception:
            logger.exception("Failed to save enriched records")
            raise

        output_paths["enriched"] = enriched_path
        logger.info(
            "✓ Wrote %d enriched records to %s (%.2fs)",
            len(enriched),
            enriched_path.name,
            time.time() - t1,
        )
    else:
        logger.info("STEP 2/3: No output directory given, skipping file output")

    # ========== STEP 3: PUBLISH ==========
    task_ids: List[int] = []
    if publisher is None:
        logger.info("STEP 3/3: No publisher configured, skipping index upload")
    else:
        t2 = time.time()
        logger.info("STEP 3/3: Publishing %d records to index %s", len(enriched), publisher.index_name)
        task_ids = publisher.publish(enriched)
        logger.info("✓ Published in %.2fs", time.time() - t2)

    if output_dir is not None:
        _save_metadata(output_paths["enriched"].parent, run_timestamp, keep_history, {
            "input_file": str(input_path),
            "total_records": len(enriched),
            "with_metadata": with_metadata,
            "defaulted": len(enriched) - with_metadata,
            "index_name": publisher.index_name if publisher is not None else None,
            "task_ids": task_ids,
            "outputs": {k: str(v) for k, v in output_paths.items()},
            "duration_seconds": time.time() - job_start,
        })

    return len(enriched), with_metadata, output_paths


def _save_metadata(
    output_dir: Path,
    run_timestamp: str,
    keep_history: bool,
    metadata: Dict[str, Any]
) -> None:
    """Save pipeline run metadata."""
    if keep_history:
        meta_filename = f"run_metadata_{run_timestamp}.json"
    else:
        meta_filename = "run_metadata.json"

    meta_path = output_dir / meta_filename
    metadata["timestamp"] = run_timestamp

    try:
        with meta_path.open("w", encoding="utf-8") as f:
            json.dump(metadata, f, ensure_ascii=False, indent=2)
        logger.info("✓ Saved: %s", meta_filename)
    except Exception:
        logger.warning("Failed to save metadata (non-fatal)", exc_info=True)
