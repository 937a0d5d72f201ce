"""Data Loader Module

Loads the article collection to enrich from a JSON file.
Supports a top-level array as well as arrays wrapped in a container
object ('articles', 'records' or 'hits' key).
"""

import json
from pathlib import Path
from typing import Any, Dict, List

from .exceptions import SourceLoadError

WRAPPER_KEYS = ("articles", "records", "hits")


def load_articles(path: str | Path) -> List[Dict[str, Any]]:
    """Load article records from a JSON file.

    Supported input formats:
      - Direct list of records: [{...}, {...}, ...]
      - Wrapped in 'articles', 'records' or 'hits': {"articles": [...]}

    Args:
        path: File path to JSON file containing article records

    Returns:
        List of record dictionaries, in file order

    Raises:
        SourceLoadError: If the file is missing or unreadable, is not valid
            JSON (including values the decoder rejects, such as oversized
            integers or excessive nesting), or does not hold a collection
            of JSON objects
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as exc:
        raise SourceLoadError(f"Input file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise SourceLoadError(f"Invalid JSON in input file {path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceLoadError(f"Could not read input file {path}: {exc}") from exc
    except (ValueError, RecursionError) as exc:
        # oversized integer literals, pathological nesting
        raise SourceLoadError(f"Could not parse input file {path}: {exc}") from exc

    if isinstance(data, dict):
        # fall back if wrapped
        for key in WRAPPER_KEYS:
            if isinstance(data.get(key), list):
                data = data[key]
                break

    if not isinstance(data, list):
        raise SourceLoadError(
            f"Expected a JSON array of records in {path}, got {type(data).__name__}"
        )

    for idx, record in enumerate(data):
        if not isinstance(record, dict):
            raise SourceLoadError(
                f"Record at index {idx} in {path} is not a JSON object "
                f"(got {type(record).__name__})"
            )

    return data
