"""
Schema validation and column type coercion for report tables.
"""
import pandas as pd
from typing import List, Tuple, Dict

from worklog.config import REQUIRED_COLUMNS, OPTIONAL_COLUMNS, TASK_TYPES
from worklog.data.models import parse_flag


class SchemaValidationError(Exception):
    """Raised when required columns are missing."""
    pass


def validate_required_columns(df: pd.DataFrame, table_name: str) -> Tuple[bool, List[str]]:
    """
    Validate that required columns exist in dataframe.
    Returns (is_valid, missing_columns).
    """
    if table_name not in REQUIRED_COLUMNS:
        return True, []

    required = REQUIRED_COLUMNS[table_name]
    missing = [col for col in required if col not in df.columns]

    return len(missing) == 0, missing


def check_optional_columns(df: pd.DataFrame, table_name: str) -> List[str]:
    """
    Check which optional columns are missing.
    Returns list of missing optional columns.
    """
    if table_name not in OPTIONAL_COLUMNS:
        return []

    optional = OPTIONAL_COLUMNS[table_name]
    return [col for col in optional if col not in df.columns]


def validate_schema(df: pd.DataFrame, table_name: str, strict: bool = True) -> Dict:
    """
    Full schema validation.

    Args:
        df: DataFrame to validate
        table_name: Name of table for column requirements lookup
        strict: If True, raise error on missing required columns

    Returns:
        Dict with validation results
    """
    is_valid, missing_required = validate_required_columns(df, table_name)
    missing_optional = check_optional_columns(df, table_name)

    result = {
        "is_valid": is_valid,
        "missing_required": missing_required,
        "missing_optional": missing_optional,
        "total_columns": len(df.columns),
        "total_rows": len(df),
    }

    if strict and not is_valid:
        raise SchemaValidationError(
            f"Missing required columns in {table_name}: {missing_required}"
        )

    return result


def ensure_column_types(df: pd.DataFrame) -> pd.DataFrame:
    """
    Ensure consistent column types.

    Ungraded quality markers ("-") become NaN; identifiers stay strings.
    """
    df = df.copy()

    for col in ["report_id", "staff_id"]:
        if col in df.columns:
            df[col] = df[col].astype(str)

    if "duration_hrs" in df.columns:
        df["duration_hrs"] = pd.to_numeric(df["duration_hrs"], errors="coerce")

    if "quality_score" in df.columns:
        df["quality_score"] = pd.to_numeric(df["quality_score"], errors="coerce")

    if "is_completed" in df.columns:
        df["is_completed"] = df["is_completed"].map(parse_flag).astype(bool)

    if "report_date" in df.columns:
        df["report_date"] = pd.to_datetime(df["report_date"], errors="coerce")

    return df


def find_invalid_rows(df: pd.DataFrame) -> pd.DataFrame:
    """
    Rows that would distort analytics: negative or missing durations,
    out-of-range quality scores, unknown task types, unparseable dates.

    Analytics accept these rows as-is; this is for data-quality review only.
    """
    df = ensure_column_types(df)
    issues = pd.Series("", index=df.index)

    if "duration_hrs" in df.columns:
        issues = issues.where(~df["duration_hrs"].isna(), issues + "missing duration; ")
        issues = issues.where(~(df["duration_hrs"] < 0), issues + "negative duration; ")
    if "quality_score" in df.columns:
        out_of_range = df["quality_score"].notna() & ~df["quality_score"].between(1, 5)
        issues = issues.where(~out_of_range, issues + "quality out of range; ")
    if "task_type" in df.columns:
        bad_type = df["task_type"].notna() & ~df["task_type"].isin(TASK_TYPES)
        issues = issues.where(~bad_type, issues + "unknown task type; ")
    if "report_date" in df.columns:
        issues = issues.where(~df["report_date"].isna(), issues + "invalid date; ")

    result = df[issues != ""].copy()
    result["issues"] = issues[issues != ""].str.rstrip("; ")
    return result
