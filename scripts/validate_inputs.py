#!/usr/bin/env python
"""
Validate report and user data files against schema requirements.

Usage:
    python scripts/validate_inputs.py
    python scripts/validate_inputs.py --data-dir /path/to/data
"""
import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from worklog.config import config, setup_logging, DATA_FILES
from worklog.data.loader import read_reports, read_users, resolve_data_file
from worklog.data.models import ReportFormatError
from worklog.data.schema import SchemaValidationError, find_invalid_rows
from worklog.data.semantic import reports_to_task_frame

logger = logging.getLogger("validate_inputs")


def validate_file(filepath: Path, table_name: str) -> dict:
    """Validate a single file."""
    result = {
        "exists": False,
        "format": None,
        "rows": 0,
        "valid": False,
        "invalid_rows": 0,
        "errors": [],
    }

    found = resolve_data_file(filepath)
    if found is None:
        result["errors"].append(f"File not found: {filepath}.(parquet|csv|json)")
        return result

    result["exists"] = True
    result["format"] = found.suffix.lstrip(".")

    try:
        if table_name == "task_reports":
            reports = read_reports(found)
            tasks = reports_to_task_frame(reports)
            result["rows"] = len(tasks)
            result["reports"] = len(reports)
            result["invalid_rows"] = len(find_invalid_rows(tasks))
        else:
            result["rows"] = len(read_users(found))
        result["valid"] = True
    except (ReportFormatError, SchemaValidationError, ValueError, OSError) as e:
        result["errors"].append(f"Failed to load: {e}")

    return result


def main():
    parser = argparse.ArgumentParser(description="Validate input data files")
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Override data directory"
    )

    args = parser.parse_args()
    setup_logging("WARNING")

    data_dir = Path(args.data_dir) if args.data_dir else config.data_dir
    processed_dir = data_dir / "processed"

    print("=" * 60)
    print("Data Input Validation")
    print("=" * 60)
    print(f"Source directory: {processed_dir}")
    print()

    all_valid = True

    for table_key, filename in DATA_FILES.items():
        print(f"Validating: {table_key}")
        print("-" * 40)

        result = validate_file(processed_dir / filename, table_key)

        if result["exists"]:
            print(f"  ✓ Found: {filename}.{result['format']}")
            print(f"    Rows: {result['rows']:,}")
            if "reports" in result:
                print(f"    Reports: {result['reports']:,}")
            if result["valid"]:
                print("  ✓ Schema valid")
            if result["invalid_rows"]:
                print(f"  ⚠ Rows needing review: {result['invalid_rows']:,}")
        else:
            print(f"  ✗ Not found: {filename}")
            if table_key == "task_reports":
                all_valid = False
                print("    (REQUIRED)")
            else:
                print("    (optional)")
                result["errors"] = []

        for err in result["errors"]:
            print(f"  ✗ Error: {err}")
            all_valid = False

        print()

    print("=" * 60)
    if all_valid:
        print("✓ All validations passed")
        sys.exit(0)
    else:
        print("✗ Validation failed - see errors above")
        sys.exit(1)


if __name__ == "__main__":
    main()
