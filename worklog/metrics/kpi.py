"""
KPI chart transforms: reshape the task frame into chart-ready tables.
"""
import pandas as pd
import numpy as np
from typing import Dict, Mapping, Optional

from worklog.data.semantic import normalise_task_names
from worklog.metrics.report_analytics import default_staff_name
from worklog.metrics.stats import round_half_up


def _with_staff_label(df: pd.DataFrame, staff_names: Optional[Mapping[str, str]]) -> pd.DataFrame:
    names = staff_names or {}
    df = df.copy()
    df["staff"] = [names.get(sid) or default_staff_name(sid) for sid in df["staff_id"]]
    return df


def _rate_pct(numerator: pd.Series, denominator: pd.Series) -> pd.Series:
    pct = np.where(denominator > 0, numerator / denominator.where(denominator > 0, 1) * 100, 0.0)
    return round_half_up(pd.Series(pct, index=numerator.index), 1)


def transform_kpi_for_charts(tasks: pd.DataFrame,
                             staff_names: Optional[Mapping[str, str]] = None) -> Dict[str, pd.DataFrame]:
    """
    Build chart-ready tables from the task frame.

    Returns dict with:
    - daily_line: staff, report_date, hours
    - delivery_bars: staff, deliveries (completed tasks)
    - avg_task_time: staff, avg_hours
    - task_timeline: task_name, total_hours
    - completion_rate: staff, completed, total_tasks, rate_pct
    - fix_rate: staff, fix_hours, total_hours, rate_pct
    """
    if len(tasks) == 0:
        return {
            "daily_line": pd.DataFrame(columns=["staff", "report_date", "hours"]),
            "delivery_bars": pd.DataFrame(columns=["staff", "deliveries"]),
            "avg_task_time": pd.DataFrame(columns=["staff", "avg_hours"]),
            "task_timeline": pd.DataFrame(columns=["task_name", "total_hours"]),
            "completion_rate": pd.DataFrame(columns=["staff", "completed", "total_tasks", "rate_pct"]),
            "fix_rate": pd.DataFrame(columns=["staff", "fix_hours", "total_hours", "rate_pct"]),
        }

    df = tasks.copy()
    df["duration_hrs"] = pd.to_numeric(df["duration_hrs"], errors="coerce").fillna(0.0)
    df["is_completed"] = df["is_completed"].astype(bool)
    df["fix_hours"] = np.where(df["task_type"] == "fix", df["duration_hrs"], 0.0)

    daily_line = (
        df.groupby(["staff_id", "report_date"], sort=True)["duration_hrs"].sum()
        .reset_index()
        .rename(columns={"duration_hrs": "hours"})
    )
    daily_line = _with_staff_label(daily_line, staff_names)[["staff", "report_date", "hours"]]

    staff = df.groupby("staff_id", sort=False).agg(
        deliveries=("is_completed", "sum"),
        total_tasks=("is_completed", "size"),
        avg_hours=("duration_hrs", "mean"),
        fix_hours=("fix_hours", "sum"),
        total_hours=("duration_hrs", "sum"),
    ).reset_index()
    staff = _with_staff_label(staff, staff_names)
    staff["deliveries"] = staff["deliveries"].astype(int)

    completion = staff[["staff", "deliveries", "total_tasks"]].rename(columns={"deliveries": "completed"})
    completion["rate_pct"] = _rate_pct(completion["completed"], completion["total_tasks"])

    fix_rate = staff[["staff", "fix_hours", "total_hours"]].copy()
    fix_rate["rate_pct"] = _rate_pct(fix_rate["fix_hours"], fix_rate["total_hours"])

    task_timeline = (
        normalise_task_names(df).groupby("task_name", sort=False)["duration_hrs"].sum()
        .reset_index()
        .rename(columns={"duration_hrs": "total_hours"})
    )

    return {
        "daily_line": daily_line,
        "delivery_bars": staff[["staff", "deliveries"]],
        "avg_task_time": staff[["staff", "avg_hours"]],
        "task_timeline": task_timeline,
        "completion_rate": completion,
        "fix_rate": fix_rate,
    }
