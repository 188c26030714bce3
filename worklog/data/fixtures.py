"""
Seed roster of staff performance profiles for demo dashboards and tests.

Nothing imports this implicitly; callers pass sample_roster() into the
simulator or profile views.
"""
from typing import List
import copy

from worklog.data.models import StaffPerformanceProfile


# Fixed 31-day histories keep demo charts stable between reloads
SAMPLE_DAILY_HOURS = {
    "1": [6.2, 6.8, 6.5, 6.3, 7.0, 6.1, 6.9, 6.4, 6.7, 6.5, 6.3, 6.8, 6.6, 6.2, 7.1, 6.4,
          6.5, 6.9, 6.3, 6.7, 6.5, 6.4, 6.8, 6.2, 6.6, 7.0, 6.3, 6.5, 6.7, 6.4, 6.6],
    "2": [7.1, 6.9, 7.2, 7.0, 6.8, 7.3, 6.9, 7.1, 7.0, 6.9, 7.2, 7.0, 6.8, 7.1, 7.3, 6.9,
          7.0, 7.1, 6.8, 7.2, 7.0, 6.9, 7.1, 7.3, 6.8, 7.0, 7.2, 6.9, 7.1, 7.0, 6.9],
    "3": [5.8, 4.9, 5.3, 6.2, 5.1, 5.9, 4.8, 5.5, 6.0, 5.3, 5.7, 4.9, 6.1, 5.4, 5.2, 5.8,
          5.0, 5.6, 5.3, 5.9, 5.1, 5.5, 6.2, 5.0, 5.4, 5.8, 5.2, 5.6, 5.3, 5.7, 5.4],
    "4": [6.2, 5.8, 6.1, 6.3, 5.9, 6.0, 6.2, 5.7, 6.4, 6.0, 5.9, 6.3, 6.1, 5.8, 6.2, 6.0,
          6.1, 6.3, 5.9, 6.2, 6.0, 5.8, 6.4, 6.1, 5.9, 6.2, 6.0, 6.3, 5.8, 6.1, 6.0],
    "5": [6.9, 6.7, 7.0, 6.8, 6.6, 7.1, 6.7, 6.9, 7.0, 6.8, 6.7, 6.9, 7.1, 6.6, 7.0, 6.8,
          6.9, 6.7, 7.0, 6.8, 6.7, 6.9, 7.1, 6.6, 6.8, 7.0, 6.7, 6.9, 6.8, 7.0, 6.8],
}

_SAMPLE_ROSTER = [
    StaffPerformanceProfile(
        staff_id="1",
        staff_name="Taro Tanaka",
        daily_hours=SAMPLE_DAILY_HOURS["1"],
        daily_work_hours=6.5,
        monthly_hours_available=160,
        monthly_deliveries=45,
        avg_time_per_task=3.5,
        avg_quality=4.2,
        efficiency=0.85,
        fatigue_index=0.15,
        specialties=["Creation", "Video editing", "Image retouching"],
    ),
    StaffPerformanceProfile(
        staff_id="2",
        staff_name="Hanako Sato",
        daily_hours=SAMPLE_DAILY_HOURS["2"],
        daily_work_hours=7.0,
        monthly_hours_available=170,
        monthly_deliveries=38,
        avg_time_per_task=4.2,
        avg_quality=4.5,
        efficiency=0.88,
        fatigue_index=0.12,
        specialties=["Creation", "Reels", "Effects"],
    ),
    StaffPerformanceProfile(
        staff_id="3",
        staff_name="Ichiro Suzuki",
        daily_hours=SAMPLE_DAILY_HOURS["3"],
        daily_work_hours=5.5,
        monthly_hours_available=140,
        monthly_deliveries=32,
        avg_time_per_task=3.8,
        avg_quality=3.9,
        efficiency=0.78,
        fatigue_index=0.22,
        specialties=["Revisions", "Caption writing", "Research"],
    ),
    StaffPerformanceProfile(
        staff_id="4",
        staff_name="Misaki Takahashi",
        daily_hours=SAMPLE_DAILY_HOURS["4"],
        daily_work_hours=6.0,
        monthly_hours_available=150,
        monthly_deliveries=40,
        avg_time_per_task=3.2,
        avg_quality=4.0,
        efficiency=0.82,
        fatigue_index=0.18,
        specialties=["Creation", "Image editing", "Design"],
    ),
    StaffPerformanceProfile(
        staff_id="5",
        staff_name="Kenta Yamada",
        daily_hours=SAMPLE_DAILY_HOURS["5"],
        daily_work_hours=6.8,
        monthly_hours_available=165,
        monthly_deliveries=42,
        avg_time_per_task=3.6,
        avg_quality=4.3,
        efficiency=0.86,
        fatigue_index=0.14,
        specialties=["Creation", "Story editing", "Trend analysis"],
    ),
]


def sample_roster() -> List[StaffPerformanceProfile]:
    """Return a fresh copy of the seed roster."""
    return copy.deepcopy(_SAMPLE_ROSTER)
