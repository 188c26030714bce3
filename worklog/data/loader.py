"""
Data loading utilities with Streamlit caching.

Reports come either as a flat task table (parquet/csv, one row per task) or
as nested report documents exported from the report store (json).
"""
import json
import logging
import pandas as pd
import streamlit as st
from pathlib import Path
from typing import Any, Dict, List, Optional

from worklog.config import config, DATA_FILES
from worklog.data.models import DailyReport, ReportFormatError, TaskRecord, parse_date, parse_quality_score
from worklog.data.schema import ensure_column_types, validate_schema

logger = logging.getLogger(__name__)

TABLE_SUFFIXES = (".parquet", ".csv", ".json")


def resolve_data_file(filepath: Path) -> Optional[Path]:
    """Return the first existing parquet, csv or json variant of filepath."""
    for suffix in TABLE_SUFFIXES:
        candidate = filepath.with_suffix(suffix)
        if candidate.exists():
            return candidate
    return None


def _load_table(filepath: Path) -> Optional[pd.DataFrame]:
    """Load a flat table (parquet or csv)."""
    if filepath.suffix == ".parquet":
        return pd.read_parquet(filepath)
    if filepath.suffix == ".csv":
        return pd.read_csv(filepath)
    return None


def _is_task_row(row: Dict[str, Any]) -> bool:
    # Reports with no tasks are exported as a single row with empty task fields
    return not (pd.isna(row.get("task_type")) and pd.isna(row.get("duration_hrs")))


def frame_to_reports(df: pd.DataFrame) -> List[DailyReport]:
    """
    Rebuild reports from a flat task table.

    Rows sharing a report_id become one report, in order of first appearance.
    """
    validate_schema(df, "task_reports", strict=True)
    df = ensure_column_types(df)
    if df["report_date"].isna().any():
        bad = df.loc[df["report_date"].isna(), "report_id"].unique().tolist()
        raise ReportFormatError(f"Unparseable report dates for reports: {bad}")

    reports = []
    for report_id, group in df.groupby("report_id", sort=False):
        first = group.iloc[0]
        tasks = []
        for row in group.to_dict("records"):
            if not _is_task_row(row):
                continue
            tasks.append(TaskRecord(
                task_type="" if pd.isna(row["task_type"]) else str(row["task_type"]),
                duration_hrs=0.0 if pd.isna(row["duration_hrs"]) else float(row["duration_hrs"]),
                task_name="" if pd.isna(row["task_name"]) else str(row["task_name"]),
                quality_score=parse_quality_score(row.get("quality_score")),
                is_completed=bool(row.get("is_completed", True)),
                account_name=None if pd.isna(row.get("account_name")) else row.get("account_name"),
            ))
        learnings = first.get("learnings", "")
        reports.append(DailyReport(
            report_id=str(report_id),
            staff_id=str(first["staff_id"]),
            report_date=parse_date(first["report_date"]),
            tasks=tuple(tasks),
            learnings="" if pd.isna(learnings) else str(learnings),
        ))

    return reports


def read_report_documents(filepath: Path) -> List[DailyReport]:
    """Load nested report documents from a json file (a list or {"reports": [...]})."""
    with open(filepath, encoding="utf-8") as fh:
        payload = json.load(fh)

    docs = payload.get("reports", []) if isinstance(payload, dict) else payload
    if not isinstance(docs, list):
        raise ReportFormatError(f"Expected a list of reports in {filepath}")

    return [DailyReport.from_dict(doc) for doc in docs]


def read_reports(filepath: Path) -> List[DailyReport]:
    """Read reports from any supported file format."""
    if filepath.suffix == ".json":
        reports = read_report_documents(filepath)
    else:
        df = _load_table(filepath)
        if df is None:
            raise ReportFormatError(f"Unsupported report file: {filepath}")
        reports = frame_to_reports(df)

    logger.info("Loaded %d reports from %s", len(reports), filepath)
    return reports


def read_users(filepath: Path) -> pd.DataFrame:
    """Read the user directory (staff_id, name, role, ...)."""
    if filepath.suffix == ".json":
        with open(filepath, encoding="utf-8") as fh:
            df = pd.DataFrame(json.load(fh))
        df = df.rename(columns={"id": "staff_id", "dailyAvailableHours": "daily_available_hours"})
    else:
        df = _load_table(filepath)

    validate_schema(df, "users", strict=True)
    df["staff_id"] = df["staff_id"].astype(str)
    return df


def staff_name_map(users: pd.DataFrame) -> Dict[str, str]:
    """Map staff_id to display name."""
    if len(users) == 0:
        return {}
    return dict(zip(users["staff_id"].astype(str), users["name"].astype(str)))


@st.cache_data(ttl=config.cache_ttl_seconds)
def load_reports() -> List[DailyReport]:
    """Load every daily report under the processed data directory."""
    filepath = resolve_data_file(config.processed_dir / DATA_FILES["task_reports"])
    if filepath is None:
        st.error(f"Could not find task_reports in {config.processed_dir}")
        st.stop()
    return read_reports(filepath)


@st.cache_data(ttl=config.cache_ttl_seconds)
def load_users() -> pd.DataFrame:
    """Load the user directory; empty when absent."""
    filepath = resolve_data_file(config.processed_dir / DATA_FILES["users"])
    if filepath is None:
        return pd.DataFrame(columns=["staff_id", "name"])
    return read_users(filepath)


def get_data_status(data_dir: Optional[Path] = None) -> Dict[str, Dict[str, Any]]:
    """Get status of all data files."""
    processed_dir = (data_dir or config.data_dir) / "processed"
    status = {}
    for key, filename in DATA_FILES.items():
        found = resolve_data_file(processed_dir / filename)
        status[key] = {
            "exists": found is not None,
            "format": found.suffix.lstrip(".") if found else None,
            "path": found,
        }
    return status
