"""
Semantic layer: canonical task frame and safe task-metric rollups.

All report aggregations go through these helpers so staff, task and overall
views agree on rounding and on how ungraded tasks are treated.
"""
import pandas as pd
import numpy as np
from typing import Iterable, List, Optional

from worklog.config import TASK_TYPES, UNKNOWN_TASK_NAME
from worklog.data.models import DailyReport
from worklog.metrics.stats import largest_remainder_round, round_half_up


# =============================================================================
# CANONICAL TASK FRAME
# =============================================================================
# One row per task: report_id → staff_id → report_date → task

TASK_FRAME_COLUMNS = [
    "report_id",
    "staff_id",
    "report_date",
    "task_name",
    "task_type",
    "duration_hrs",
    "quality_score",
    "is_completed",
]

METRIC_COLUMNS = [
    "total_hours",
    "create_hours",
    "fix_hours",
    "correction_hours",
    "average_quality",
    "task_count",
]


def reports_to_task_frame(reports: Iterable[DailyReport]) -> pd.DataFrame:
    """
    Flatten reports into one row per task.

    Staff id and report date are inherited from the parent report. Ungraded
    quality scores become NaN.
    """
    rows = []
    for report in reports:
        for task in report.tasks:
            rows.append({
                "report_id": report.report_id,
                "staff_id": report.staff_id,
                "report_date": pd.Timestamp(report.report_date),
                "task_name": task.task_name,
                "task_type": task.task_type,
                "duration_hrs": task.duration_hrs,
                "quality_score": np.nan if task.quality_score is None else task.quality_score,
                "is_completed": task.is_completed,
            })

    if not rows:
        return pd.DataFrame(columns=TASK_FRAME_COLUMNS)

    return pd.DataFrame(rows, columns=TASK_FRAME_COLUMNS)


def normalise_task_names(df: pd.DataFrame) -> pd.DataFrame:
    """Put empty or missing task names in a single unknown-task bucket."""
    df = df.copy()
    names = df["task_name"].fillna("").astype(str).str.strip()
    df["task_name"] = names.where(names != "", UNKNOWN_TASK_NAME)
    return df


# =============================================================================
# TASK METRIC ROLLUPS
# =============================================================================

def _empty_metrics(group_keys: Optional[List[str]]) -> pd.DataFrame:
    return pd.DataFrame(columns=(group_keys or []) + METRIC_COLUMNS)


def task_metrics_rollup(df: pd.DataFrame,
                        group_keys: Optional[List[str]] = None) -> pd.DataFrame:
    """
    Compute aggregated task metrics, optionally grouped.

    Returns DataFrame with:
    - total_hours: all durations, rounded to 1dp at output
    - create_hours / fix_hours / correction_hours: per task type, rounded so
      they sum to total_hours (less when some tasks have another type)
    - average_quality: mean over graded tasks only, 0 when none are graded
    - task_count: every task, graded or not

    Non-numeric durations count as 0 hours; negative durations are summed as-is.
    """
    if len(df) == 0:
        if group_keys:
            return _empty_metrics(group_keys)
        return pd.DataFrame([{col: 0 for col in METRIC_COLUMNS}])

    df = df.copy()
    df["duration_hrs"] = pd.to_numeric(df["duration_hrs"], errors="coerce").fillna(0.0)
    df["quality_score"] = pd.to_numeric(df["quality_score"], errors="coerce")

    for task_type in TASK_TYPES:
        df[f"{task_type}_hours"] = np.where(df["task_type"] == task_type, df["duration_hrs"], 0.0)

    agg_spec = dict(
        total_hours=("duration_hrs", "sum"),
        create_hours=("create_hours", "sum"),
        fix_hours=("fix_hours", "sum"),
        correction_hours=("correction_hours", "sum"),
        quality_sum=("quality_score", "sum"),
        quality_count=("quality_score", "count"),
        task_count=("duration_hrs", "size"),
    )

    if group_keys:
        result = df.groupby(group_keys, sort=False, dropna=False).agg(**agg_spec).reset_index()
    else:
        result = df.assign(_all=0).groupby("_all").agg(**agg_spec).reset_index(drop=True)

    result["average_quality"] = np.where(
        result["quality_count"] > 0,
        result["quality_sum"] / result["quality_count"].where(result["quality_count"] > 0, 1),
        0.0,
    )

    # Round only at output so per-task rounding error does not compound
    category_cols = [f"{task_type}_hours" for task_type in TASK_TYPES]
    raw_total = result["total_hours"].copy()
    raw_categorised = result[category_cols].sum(axis=1)

    result["total_hours"] = round_half_up(raw_total, 1)
    result["average_quality"] = round_half_up(result["average_quality"], 1)

    # Category hours must add up to the rounded total when every task has a
    # known type, and never exceed it otherwise
    categorised = pd.Series(np.where(
        np.isclose(raw_categorised, raw_total),
        result["total_hours"],
        np.minimum(round_half_up(raw_categorised, 1), result["total_hours"]),
    ), index=result.index)
    result[category_cols] = largest_remainder_round(result[category_cols], categorised, 1)

    result["task_count"] = result["task_count"].astype(int)

    return result[(group_keys or []) + METRIC_COLUMNS]
