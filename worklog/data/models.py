"""
Data models for reports, staff profiles and allocation results.

Reports mirror the documents the report store hands back; profiles and
allocation results are derived snapshots that are recomputed on every query.
"""
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple
import math

import pandas as pd

from worklog.config import config
from worklog.metrics.stats import clamp, population_std


class ReportFormatError(ValueError):
    """Raised when a report document cannot be parsed."""
    pass


UNGRADED = "-"


def parse_quality_score(value: Any) -> Optional[int]:
    """
    Normalise a quality score to an int 1-5, or None when ungraded.

    The store writes "-" for ungraded tasks; NaN and None also mean ungraded.
    """
    if value is None or value == UNGRADED or value == "":
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    try:
        score = float(value)
    except (TypeError, ValueError) as exc:
        raise ReportFormatError(f"Invalid quality score: {value!r}") from exc
    if not score.is_integer():
        raise ReportFormatError(f"Quality score must be a whole number: {value!r}")
    return int(score)


def parse_duration(value: Any) -> float:
    """Hours as float; missing means 0."""
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ReportFormatError(f"Invalid duration: {value!r}") from exc


TRUE_FLAGS = {"true", "yes", "y", "1"}
FALSE_FLAGS = {"false", "no", "n", "0"}


def parse_flag(value: Any, default: bool = True) -> bool:
    """
    Parse a completion flag. Strings are matched case-insensitively, so
    "false" is False; missing values (None, NaN, NA, "") take the default.
    """
    if isinstance(value, str):
        text = value.strip().lower()
        if text == "":
            return default
        if text in TRUE_FLAGS:
            return True
        if text in FALSE_FLAGS:
            return False
        raise ReportFormatError(f"Invalid completion flag: {value!r}")
    if value is None or pd.isna(value):
        return default
    return bool(value)


def parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return pd.Timestamp(value).date()
    except (TypeError, ValueError) as exc:
        raise ReportFormatError(f"Invalid date: {value!r}") from exc


def _pick(doc: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first key present; documents come in camelCase or snake_case."""
    for key in keys:
        if key in doc and doc[key] is not None:
            return doc[key]
    return default


@dataclass(frozen=True)
class TaskRecord:
    """One task entry within a daily report."""
    task_type: str
    duration_hrs: float
    task_name: str = ""
    quality_score: Optional[int] = None
    is_completed: bool = True
    account_name: Optional[str] = None
    scheduled_date: Optional[date] = None
    revision_workload: Optional[str] = None
    special_notes: Optional[str] = None

    @property
    def is_graded(self) -> bool:
        return self.quality_score is not None

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "TaskRecord":
        # Types outside TASK_TYPES are kept; they count toward totals only.
        return cls(
            task_type=str(_pick(doc, "task_type", "taskType", default="")),
            duration_hrs=parse_duration(_pick(doc, "duration_hrs", "durationHrs")),
            task_name=_pick(doc, "task_name", "taskName", default="") or "",
            quality_score=parse_quality_score(_pick(doc, "quality_score", "qualityScore")),
            is_completed=parse_flag(_pick(doc, "is_completed", "isCompleted")),
            account_name=_pick(doc, "account_name", "accountName"),
            scheduled_date=parse_date(_pick(doc, "scheduled_date", "scheduledDate")),
            revision_workload=_pick(doc, "revision_workload", "revisionWorkload"),
            special_notes=_pick(doc, "special_notes", "specialNotes"),
        )


@dataclass(frozen=True)
class DailyReport:
    """One staff member's submission for a given date."""
    report_id: str
    staff_id: str
    report_date: date
    tasks: Tuple[TaskRecord, ...] = ()
    learnings: str = ""
    own_research_hours: float = 0.0
    own_research_learnings: str = ""
    competitor_research_hours: float = 0.0
    competitor_research_learnings: str = ""

    @property
    def total_hours(self) -> float:
        return sum(t.duration_hrs for t in self.tasks)

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "DailyReport":
        staff_id = _pick(doc, "staff_id", "userId", "user_id")
        if staff_id is None:
            raise ReportFormatError(f"Report without staff id: {doc.get('id', doc.get('report_id'))!r}")
        report_date = parse_date(_pick(doc, "report_date", "date"))
        if report_date is None:
            raise ReportFormatError(f"Report without date for staff {staff_id!r}")
        return cls(
            report_id=str(_pick(doc, "report_id", "id", default="")),
            staff_id=str(staff_id),
            report_date=report_date,
            tasks=tuple(TaskRecord.from_dict(t) for t in _pick(doc, "tasks", default=[])),
            learnings=_pick(doc, "learnings", default=""),
            own_research_hours=parse_duration(_pick(doc, "own_research_hours", "ownResearchHours")),
            own_research_learnings=_pick(doc, "own_research_learnings", "ownResearchLearnings", default=""),
            competitor_research_hours=parse_duration(
                _pick(doc, "competitor_research_hours", "competitorResearchHours")
            ),
            competitor_research_learnings=_pick(
                doc, "competitor_research_learnings", "competitorResearchLearnings", default=""
            ),
        )


@dataclass
class StaffPerformanceProfile:
    """
    Capacity and track-record snapshot for one staff member.

    efficiency and fatigue_index are clamped into [0, 1] on construction.
    Composite scores (speed, quality, stability, efficiency_score) are derived
    on access and always fall in [0, 100].
    """
    staff_id: str
    staff_name: str
    daily_hours: List[float] = field(default_factory=list)
    daily_work_hours: float = 0.0
    monthly_hours_available: float = 0.0
    monthly_deliveries: int = 0
    avg_time_per_task: float = 0.0
    avg_quality: float = 0.0
    efficiency: float = 0.0
    fatigue_index: float = 0.0
    specialties: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.efficiency = clamp(self.efficiency)
        self.fatigue_index = clamp(self.fatigue_index)

    @property
    def current_monthly_hours(self) -> float:
        return self.daily_work_hours * config.working_days_per_month

    @property
    def current_load(self) -> float:
        if self.monthly_hours_available <= 0:
            return 0.0
        return self.current_monthly_hours / self.monthly_hours_available

    @property
    def potential_max_items(self) -> int:
        if self.avg_time_per_task <= 0:
            return 0
        return math.floor(self.monthly_hours_available * self.efficiency / self.avg_time_per_task)

    @property
    def speed(self) -> float:
        # Shorter production time scores higher; 2h per task or less is 100.
        # No recorded time per task scores 0.
        if self.avg_time_per_task <= 0:
            return 0.0
        return clamp(10 / self.avg_time_per_task * 20, 0, 100)

    @property
    def quality(self) -> float:
        return clamp(self.avg_quality / 5 * 100, 0, 100)

    @property
    def stability(self) -> float:
        working = [h for h in self.daily_hours if h > 0]
        if not working:
            return 50.0
        return clamp(100 - population_std(working) * 15, 0, 100)

    @property
    def efficiency_score(self) -> float:
        return clamp(self.efficiency * 100, 0, 100)

    @property
    def top_specialty(self) -> str:
        return self.specialties[0] if self.specialties else "general work"

    def to_dict(self) -> Dict[str, Any]:
        row = asdict(self)
        row.update({
            "potential_max_items": self.potential_max_items,
            "speed": self.speed,
            "quality": self.quality,
            "stability": self.stability,
            "efficiency_score": self.efficiency_score,
        })
        return row


@dataclass
class TeamSummary:
    """Team-wide capacity snapshot."""
    total_staff: int
    total_monthly_capacity: float
    current_utilization: float
    average_quality: float
    total_monthly_deliveries: int


@dataclass
class AllocationRecommendation:
    """Recommended monthly allocation for one staff member."""
    staff_id: str
    staff_name: str
    current_load: float
    projected_load: float
    recommended_tasks: int
    recommended_hours: float
    capacity_remaining: float
    confidence: float
    reasoning: str


@dataclass
class SimulationResult:
    """Outcome of one allocation simulation run."""
    scenario: str
    allocations: List[AllocationRecommendation]
    team_utilization: float
    estimated_quality: float
    estimated_deliveries: int
    risks: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([asdict(a) for a in self.allocations])
