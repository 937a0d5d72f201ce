"""Pipeline CLI Entry Point

Provides the command-line interface for the article enrichment pipeline.
Handles argument parsing, logging configuration, settings/credential
loading, and construction of the model client and index publisher that
are injected into the pipeline.

Usage:
    article-enrichment --input data/articles.json --output-dir output
    article-enrichment --input data/articles.json --dry-run
    python -m article_enrichment.cli --input data/articles.json

Exit codes: 0 on success (including an empty or unreadable source),
1 on publish or unexpected failure, 2 on configuration error.
"""

import argparse
import logging
import time
from pathlib import Path

from .config import Settings
from .enricher import ContentEnricher
from .exceptions import ConfigurationError, PublishError
from .model_clients import build_model_client
from .pipeline import run_pipeline
from .publisher import build_publisher


def configure_logging(log_dir: Path = Path("logs")) -> None:
    """Configure logging with both console and file output.

    Sets up:
      - Root logger at DEBUG level
      - Console handler at INFO level for user-facing messages
      - File handler at DEBUG level for detailed troubleshooting
      - Reduced verbosity for HTTP and SDK loggers
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "pipeline.log"

    # Root logger
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    for noisy in ("httpx", "httpcore", "openai", "google_genai", "algoliasearch"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )

    # Console handler: high-level INFO+
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)

    # File handler: detailed DEBUG+
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    # Clear existing handlers to avoid duplicates if run multiple times
    logger.handlers.clear()
    logger.addHandler(console_handler)
    logger.addHandler(file_handler)


def main(argv=None) -> int:
    """
    CLI entrypoint for the article enrichment pipeline.

    Parses command-line arguments, builds the model client and publisher
    from settings, runs the pipeline once, and returns a Unix-style exit code.
    """
    parser = argparse.ArgumentParser(
        description="Enrich articles with AI metadata and publish them to Algolia"
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=Path("data/articles.json"),
        help="Path to input JSON file of article records.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory where enriched records and run metadata are written.",
    )
    parser.add_argument(
        "--index-name",
        type=str,
        default=None,
        help="Algolia index name (overrides ALGOLIA_INDEX_NAME).",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Optional limit on number of records to enrich.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Enrich records but don't write files or publish to Algolia",
    )
    parser.add_argument(
        "--no-history",
        action="store_true",
        help="Overwrite output files instead of creating timestamped versions",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to a .env file with API credentials.",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=Path("logs"),
        help="Directory for the pipeline.log file (default: logs)",
    )

    args = parser.parse_args(argv)

    configure_logging(args.log_dir)
    logger = logging.getLogger(__name__)

    logger.info("=== Starting article enrichment pipeline ===")
    logger.info("Input: %s", args.input)
    logger.info("Output directory: %s", args.output_dir or "None (no file output)")
    logger.info("Limit: %s", args.limit if args.limit else "None (all records)")
    logger.info("Dry_run: %s", args.dry_run)

    try:
        settings = Settings.from_env(args.env_file)
        enricher = ContentEnricher(build_model_client(settings))
        publisher = None
        if not args.dry_run:
            publisher = build_publisher(settings, index_name=args.index_name)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return 2

    logger.info("Model: %s (%s)", enricher.model_client.model, settings.provider)
    if publisher is not None:
        logger.info("Index: %s", publisher.index_name)
    else:
        logger.info("DRY RUN MODE: Will not publish to Algolia")

    try:
        start_time = time.time()

        total, with_metadata, output_paths = run_pipeline(
            args.input,
            enricher,
            publisher,
            output_dir=args.output_dir,
            limit=args.limit,
            dry_run=args.dry_run,
            keep_history=not args.no_history,
        )

        elapsed_time = time.time() - start_time

        logger.info("=" * 70)
        logger.info("Pipeline completed in %.2fs", elapsed_time)
        logger.info("")
        logger.info("Summary:")
        logger.info("  Input:          %s", args.input)
        logger.info("  Enriched:       %d records", total)
        logger.info("  With metadata:  %d/%d", with_metadata, total)
        if output_paths:
            logger.info("")
            logger.info("Output files:")
            for name, path in output_paths.items():
                logger.info("  %-12s %s", f"{name}:", path)
        logger.info("=" * 70)

    except PublishError as e:
        logger.error("Publishing to Algolia failed: %s", e)
        return 1
    except Exception as e:
        logger.exception(f"Pipeline failed with an unhandled exception: {e}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
