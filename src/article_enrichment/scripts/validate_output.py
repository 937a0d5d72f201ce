"""Output Validation Script

Validates that an enriched-records JSON file has the shape the search
index expects:
  - Every record is a JSON object
  - The four ai_* fields are present on every record
  - ai_keywords is a list of strings; other ai_* fields are string or null
  - Category / sentiment labels belong to the closed sets (warning only)

Usage:
    python -m article_enrichment.scripts.validate_output \\
        --path output/enriched.json

Exits with code 0 on success, 1 on validation failure, 2 on argument error.
"""

import argparse
import json
from pathlib import Path
from typing import Any, List, Tuple

from article_enrichment.models import (
    AI_CATEGORY,
    AI_FIELDS,
    AI_KEYWORDS,
    AI_SENTIMENT,
    AI_SUMMARY,
    Category,
    Sentiment,
    Unrecognized,
    classify_label,
)


def load_records(path: Path) -> List[Any]:
    """Load enriched records from a JSON file.

    Supports:
      - a JSON array of objects
      - newline-delimited JSON (JSONL)
    """
    with path.open("r", encoding="utf-8") as f:
        content = f.read().strip()

    # Try: full file is a single JSON array
    try:
        data = json.loads(content)
        if isinstance(data, list):
            return data
        else:
            raise ValueError("Top-level JSON is not a list of records.")
    except json.JSONDecodeError:
        pass  # fall through to JSONL

    records: List[Any] = []
    for line_no, line in enumerate(content.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        try:
            obj = json.loads(line)
        except json.JSONDecodeError as e:
            raise ValueError(
                f"Failed to parse JSON on line {line_no}: {e}"
            ) from e
        records.append(obj)

    if not records:
        raise ValueError("No records found in file.")

    return records


def validate_record(
    record: Any,
    idx: int,
    id_field: str = "objectID",
) -> Tuple[List[str], List[str]]:
    """Validate a single enriched record.

    Returns:
        (errors, warnings)
    """
    errors: List[str] = []
    warnings: List[str] = []

    if not isinstance(record, dict):
        errors.append(
            f"[idx={idx}] record should be an object, got {type(record).__name__}"
        )
        return errors, warnings

    if record.get(id_field) is None:
        warnings.append(f"[idx={idx}] missing identifier '{id_field}'")

    missing = [field for field in AI_FIELDS if field not in record]
    for field in missing:
        errors.append(f"[idx={idx}] missing '{field}'")

    keywords = record.get(AI_KEYWORDS)
    if AI_KEYWORDS in record:
        if not isinstance(keywords, list):
            errors.append(
                f"[idx={idx}] '{AI_KEYWORDS}' should be a list, got {type(keywords).__name__}"
            )
        elif not all(isinstance(k, str) for k in keywords):
            errors.append(f"[idx={idx}] '{AI_KEYWORDS}' contains non-string items")

    for field in (AI_SUMMARY, AI_CATEGORY, AI_SENTIMENT):
        value = record.get(field)
        if value is not None and not isinstance(value, str):
            errors.append(
                f"[idx={idx}] '{field}' should be a string or null, got {type(value).__name__}"
            )

    # Label drift is reported, not rejected
    for field, label_type in ((AI_CATEGORY, Category), (AI_SENTIMENT, Sentiment)):
        value = record.get(field)
        if isinstance(value, str) and isinstance(classify_label(value, label_type), Unrecognized):
            warnings.append(f"[idx={idx}] '{field}' has unrecognized label {value!r}")

    if not missing and all(
        not record.get(field) for field in AI_FIELDS
    ):
        warnings.append(f"[idx={idx}] enrichment defaulted (no AI metadata)")

    return errors, warnings


def main(argv: list[str] | None = None) -> None:
    """Validate an enriched records output file.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:]

    Raises:
        SystemExit: With code 0 on success, 1 on validation failure
    """
    parser = argparse.ArgumentParser(
        description="Validate enriched records JSON output."
    )
    parser.add_argument(
        "--path",
        type=str,
        required=True,
        help="Path to enriched records JSON (array or JSONL)",
    )
    parser.add_argument(
        "--id-field",
        type=str,
        default="objectID",
        help="Record key holding the identifier (default: objectID)",
    )
    args = parser.parse_args(argv)

    path = Path(args.path)

    try:
        records = load_records(path)
    except Exception as e:
        print(f"FAILED TO LOAD FILE: {e}")
        raise SystemExit(1)

    total = len(records)
    all_errors: List[str] = []
    all_warnings: List[str] = []

    for idx, record in enumerate(records):
        errors, warnings = validate_record(record, idx, args.id_field)
        all_errors.extend(errors)
        all_warnings.extend(warnings)

    if all_errors:
        print("VALIDATION FAILED:\n")
        for err in all_errors:
            print(err)
        print(f"\nTotal errors: {len(all_errors)}")
        if all_warnings:
            print(f"Total warnings: {len(all_warnings)}")
        raise SystemExit(1)

    print("VALIDATION PASSED")
    print(f"Total records: {total}")
    if all_warnings:
        print("\nWarnings (non-fatal):")
        for w in all_warnings:
            print(w)
        print(f"\nTotal warnings: {len(all_warnings)}")

    raise SystemExit(0)


if __name__ == "__main__":
    main()
