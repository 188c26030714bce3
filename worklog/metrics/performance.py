"""
Staff performance profiles derived from daily reports - capacity, track
record and composite scores.
"""
from __future__ import annotations

from collections import Counter
from datetime import date
import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from worklog.config import config
from worklog.data.models import DailyReport, StaffPerformanceProfile, TeamSummary
from worklog.data.semantic import reports_to_task_frame
from worklog.metrics.report_analytics import default_staff_name
from worklog.metrics.stats import safe_divide

logger = logging.getLogger(__name__)


TASK_TYPE_LABELS = {
    "create": "Creation",
    "fix": "Revisions",
    "correction": "Revisions",
}

FALLBACK_SPECIALTIES = ["Production", "Task execution", "General operations"]
PADDING_SPECIALTY = "Multitasking"


def _daily_hours_series(reports: Sequence[DailyReport], reference_date: date) -> List[float]:
    """
    Hours per calendar day for the history window ending at reference_date.

    Days without a report are 0. When a day has several reports the last
    submitted one wins.
    """
    window = pd.date_range(end=pd.Timestamp(reference_date), periods=config.history_days, freq="D")
    if len(reports) == 0:
        return [0.0] * config.history_days

    daily = pd.DataFrame([
        {"report_date": pd.Timestamp(r.report_date), "hours": r.total_hours}
        for r in reports
    ])
    daily = daily.drop_duplicates("report_date", keep="last").set_index("report_date")["hours"]

    return daily.reindex(window, fill_value=0.0).astype(float).tolist()


def _derive_specialties(tasks: pd.DataFrame) -> List[str]:
    """Most frequent task-type label plus the two most frequent task names, padded to three."""
    specialties: List[str] = []

    type_counts = Counter(TASK_TYPE_LABELS.get(t, "Revisions") for t in tasks["task_type"])
    if type_counts:
        specialties.append(type_counts.most_common(1)[0][0])

    name_counts = Counter(n for n in tasks["task_name"] if isinstance(n, str) and n)
    specialties.extend(name for name, _ in name_counts.most_common(2))

    if not specialties:
        return list(FALLBACK_SPECIALTIES)
    if len(specialties) < 3:
        specialties.append(PADDING_SPECIALTY)
    return specialties


def build_staff_performance(staff_id: str,
                            reports: Sequence[DailyReport],
                            staff_name: Optional[str] = None,
                            reference_date: Optional[date] = None) -> StaffPerformanceProfile:
    """
    Derive one staff member's performance profile from their reports.

    Reports belonging to other staff are ignored. The daily-hours series covers
    the history window ending at reference_date (default: today); the other
    statistics use every report supplied, averaged over a 31-day month.
    """
    reference_date = reference_date or date.today()
    staff_reports = [r for r in reports if r.staff_id == staff_id]
    tasks = reports_to_task_frame(staff_reports)

    daily_hours = _daily_hours_series(staff_reports, reference_date)

    durations = pd.to_numeric(tasks["duration_hrs"], errors="coerce").fillna(0.0)
    quality = pd.to_numeric(tasks["quality_score"], errors="coerce").dropna()

    total_tasks = len(tasks)
    total_hours = float(durations.sum())
    completed_tasks = int(tasks["is_completed"].astype(bool).sum()) if total_tasks else 0

    avg_quality = float(quality.mean()) if len(quality) > 0 else config.default_avg_quality

    avg_time_per_task = safe_divide(total_hours, total_tasks, default=0.0)
    if avg_time_per_task <= 0:
        avg_time_per_task = config.default_avg_time_per_task

    efficiency = safe_divide(completed_tasks, total_tasks, default=config.default_efficiency)

    work_days = sum(1 for h in daily_hours if h > 0)
    high_workload_days = sum(1 for h in daily_hours if h > config.high_workload_hours)
    fatigue_index = safe_divide(high_workload_days, work_days, default=config.default_fatigue_index)

    profile = StaffPerformanceProfile(
        staff_id=staff_id,
        staff_name=staff_name or default_staff_name(staff_id),
        daily_hours=daily_hours,
        daily_work_hours=total_hours / config.history_days,
        monthly_hours_available=config.monthly_hours_available,
        monthly_deliveries=completed_tasks,
        avg_time_per_task=avg_time_per_task,
        avg_quality=avg_quality,
        efficiency=efficiency,
        fatigue_index=fatigue_index,
        specialties=_derive_specialties(tasks),
    )

    logger.debug("Built profile for %s from %d reports (%d tasks)", staff_id, len(staff_reports), total_tasks)
    return profile


def build_roster(reports: Sequence[DailyReport],
                 staff_names: Optional[Mapping[str, str]] = None,
                 reference_date: Optional[date] = None) -> List[StaffPerformanceProfile]:
    """
    Build one profile per staff member appearing in the reports.
    """
    names = staff_names or {}
    staff_ids = list(dict.fromkeys(r.staff_id for r in reports))
    return [
        build_staff_performance(sid, reports, names.get(sid), reference_date)
        for sid in staff_ids
    ]


def profiles_frame(roster: Sequence[StaffPerformanceProfile]) -> pd.DataFrame:
    """Profiles with derived scores as a DataFrame."""
    if len(roster) == 0:
        return pd.DataFrame()
    return pd.DataFrame([p.to_dict() for p in roster])


def compute_team_summary(roster: Sequence[StaffPerformanceProfile]) -> TeamSummary:
    """
    Compute team-wide capacity and quality.

    Utilisation assumes config.working_days_per_month working days.
    """
    total_capacity = float(sum(p.monthly_hours_available for p in roster))
    current_hours = float(sum(p.current_monthly_hours for p in roster))

    return TeamSummary(
        total_staff=len(roster),
        total_monthly_capacity=total_capacity,
        current_utilization=safe_divide(current_hours, total_capacity),
        average_quality=float(np.mean([p.avg_quality for p in roster])) if roster else 0.0,
        total_monthly_deliveries=int(sum(p.monthly_deliveries for p in roster)),
    )


def get_staff_detail_analysis(profile: StaffPerformanceProfile) -> Dict[str, Any]:
    """
    Strengths, improvement areas and optimal monthly task count for one staff member.
    """
    strengths: List[str] = []
    improvements: List[str] = []

    if profile.avg_quality >= 4.3:
        strengths.append("Consistently delivers high-quality work")
    if profile.efficiency >= 0.85:
        strengths.append("Very high production efficiency")
    if profile.monthly_deliveries >= 40:
        strengths.append("High delivery count")
    if len(profile.specialties) >= 3:
        strengths.append(f"Broad skill set: {', '.join(profile.specialties)}")

    if safe_divide(profile.current_monthly_hours, profile.monthly_hours_available) < 0.6:
        improvements.append("Has room to take on more tasks")
    if profile.avg_quality < 4.0:
        improvements.append("Consider quality training opportunities")
    if profile.efficiency < 0.8:
        improvements.append("Consider support for working more efficiently")
    if profile.avg_time_per_task > 4.0:
        improvements.append("Process improvements could shorten production time")

    optimal_hours = profile.monthly_hours_available * config.optimal_load
    optimal_tasks = safe_divide(optimal_hours, profile.avg_time_per_task)

    return {
        "strengths": strengths,
        "improvements": improvements,
        "optimal_tasks_per_month": int(math.floor(optimal_tasks + 0.5)),
    }
