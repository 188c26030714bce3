"""
Report analytics metrics pack.

Single source of truth for: per-staff, per-task and overall report summaries.
"""
import pandas as pd
from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence

from worklog.data.models import DailyReport
from worklog.data.semantic import (
    METRIC_COLUMNS,
    normalise_task_names,
    reports_to_task_frame,
    task_metrics_rollup,
)


def default_staff_name(staff_id: str) -> str:
    """Display name used when the user directory has no entry."""
    return f"Staff {staff_id[:8]}"


def analyze_by_staff(reports: Sequence[DailyReport],
                     staff_names: Optional[Mapping[str, str]] = None) -> pd.DataFrame:
    """
    Compute report metrics per staff member.

    Every distinct staff id in the input gets exactly one row, including staff
    whose reports contain no tasks (all metrics zero).

    Returns DataFrame with: staff_id, staff_name, total_hours, create_hours,
    fix_hours, correction_hours, average_quality, task_count.
    """
    columns = ["staff_id", "staff_name"] + METRIC_COLUMNS
    staff_ids = list(dict.fromkeys(r.staff_id for r in reports))
    if not staff_ids:
        return pd.DataFrame(columns=columns)

    tasks = reports_to_task_frame(reports)
    metrics = task_metrics_rollup(tasks, ["staff_id"])

    result = (
        pd.DataFrame({"staff_id": staff_ids})
        .merge(metrics, on="staff_id", how="left")
    )
    result[METRIC_COLUMNS] = result[METRIC_COLUMNS].fillna(0)
    result["task_count"] = result["task_count"].astype(int)

    names = staff_names or {}
    result["staff_name"] = [names.get(sid) or default_staff_name(sid) for sid in result["staff_id"]]

    return result[columns]


def analyze_by_task(reports: Sequence[DailyReport]) -> pd.DataFrame:
    """
    Compute report metrics per task name.

    Tasks with an empty or missing name share one "Unknown task" row.
    """
    tasks = reports_to_task_frame(reports)
    if len(tasks) == 0:
        return pd.DataFrame(columns=["task_name"] + METRIC_COLUMNS)

    return task_metrics_rollup(normalise_task_names(tasks), ["task_name"])


def calculate_summary(reports: Sequence[DailyReport]) -> Dict[str, float]:
    """
    Compute overall report metrics, ignoring grouping.

    Empty input returns an all-zero summary.
    """
    if len(reports) == 0:
        return {col: 0 for col in METRIC_COLUMNS}

    row = task_metrics_rollup(reports_to_task_frame(reports)).iloc[0]

    return {
        "total_hours": float(row["total_hours"]),
        "create_hours": float(row["create_hours"]),
        "fix_hours": float(row["fix_hours"]),
        "correction_hours": float(row["correction_hours"]),
        "average_quality": float(row["average_quality"]),
        "task_count": int(row["task_count"]),
    }


def filter_reports(reports: Sequence[DailyReport],
                   staff_id: Optional[str] = None,
                   start_date: Optional[date] = None,
                   end_date: Optional[date] = None,
                   task_name: Optional[str] = None) -> List[DailyReport]:
    """
    Filter reports by staff, inclusive date range and task name.

    A task-name filter keeps reports containing at least one matching task.
    Results are ordered newest first.
    """
    result = []
    for report in reports:
        if staff_id is not None and report.staff_id != staff_id:
            continue
        if start_date is not None and report.report_date < start_date:
            continue
        if end_date is not None and report.report_date > end_date:
            continue
        if task_name is not None and not any(t.task_name == task_name for t in report.tasks):
            continue
        result.append(report)

    return sorted(result, key=lambda r: r.report_date, reverse=True)


def get_top_tasks_by_hours(reports: Sequence[DailyReport], n: int = 10) -> pd.DataFrame:
    """Get the task names with the most logged hours."""
    by_task = analyze_by_task(reports)
    if len(by_task) == 0:
        return by_task
    return by_task.sort_values("total_hours", ascending=False).head(n)
