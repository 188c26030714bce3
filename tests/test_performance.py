"""
Tests for staff performance profiles, team summary and detail analysis.
"""
import pytest
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from worklog.data.fixtures import sample_roster
from worklog.data.models import DailyReport, StaffPerformanceProfile, TaskRecord
from worklog.metrics.performance import (
    FALLBACK_SPECIALTIES,
    build_roster,
    build_staff_performance,
    compute_team_summary,
    get_staff_detail_analysis,
    profiles_frame,
)

REFERENCE = date(2024, 1, 31)


@pytest.fixture
def staff_reports():
    return [
        DailyReport(
            report_id="r1",
            staff_id="u1",
            report_date=date(2024, 1, 10),
            tasks=(
                TaskRecord(task_type="create", duration_hrs=3.0, task_name="Banner", quality_score=4),
                TaskRecord(task_type="fix", duration_hrs=2.0, task_name="Banner", is_completed=False),
            ),
        ),
        DailyReport(
            report_id="r2",
            staff_id="u1",
            report_date=date(2024, 1, 11),
            tasks=(
                TaskRecord(task_type="create", duration_hrs=9.0, task_name="Video", quality_score=5),
            ),
        ),
        DailyReport(
            report_id="r3",
            staff_id="u2",
            report_date=date(2024, 1, 11),
            tasks=(
                TaskRecord(task_type="fix", duration_hrs=4.0, task_name="Caption", quality_score=3),
            ),
        ),
    ]


class TestBuildStaffPerformance:
    """Tests for deriving one profile from reports."""

    def test_daily_hours_window(self, staff_reports):
        profile = build_staff_performance("u1", staff_reports, reference_date=REFERENCE)

        assert len(profile.daily_hours) == 31
        assert profile.daily_hours[9] == 5.0
        assert profile.daily_hours[10] == 9.0
        assert sum(profile.daily_hours) == 14.0

    def test_track_record(self, staff_reports):
        profile = build_staff_performance("u1", staff_reports, "Taro", reference_date=REFERENCE)

        assert profile.staff_name == "Taro"
        assert profile.avg_quality == pytest.approx(4.5)
        assert profile.avg_time_per_task == pytest.approx(14 / 3)
        assert profile.efficiency == pytest.approx(2 / 3)
        assert profile.monthly_deliveries == 2
        assert profile.daily_work_hours == pytest.approx(14 / 31)
        assert profile.monthly_hours_available == 176

    def test_fatigue_counts_days_over_eight_hours(self, staff_reports):
        profile = build_staff_performance("u1", staff_reports, reference_date=REFERENCE)

        # One of two working days is over 8 hours
        assert profile.fatigue_index == pytest.approx(0.5)

    def test_specialties(self, staff_reports):
        profile = build_staff_performance("u1", staff_reports, reference_date=REFERENCE)

        assert profile.specialties == ["Creation", "Banner", "Video"]

    def test_specialties_padded(self, staff_reports):
        profile = build_staff_performance("u2", staff_reports, reference_date=REFERENCE)

        assert profile.specialties == ["Revisions", "Caption", "Multitasking"]

    def test_defaults_without_history(self):
        profile = build_staff_performance("abcdefghij", [], reference_date=REFERENCE)

        assert profile.staff_name == "Staff abcdefgh"
        assert profile.daily_hours == [0.0] * 31
        assert profile.avg_quality == 3.0
        assert profile.avg_time_per_task == 4.0
        assert profile.efficiency == 0.8
        assert profile.fatigue_index == 0.1
        assert profile.specialties == FALLBACK_SPECIALTIES
        assert profile.stability == 50.0

    def test_last_report_wins_for_same_day(self):
        reports = [
            DailyReport("r1", "u1", date(2024, 1, 31), (TaskRecord("create", 3.0),)),
            DailyReport("r2", "u1", date(2024, 1, 31), (TaskRecord("create", 5.0),)),
        ]

        profile = build_staff_performance("u1", reports, reference_date=REFERENCE)

        assert profile.daily_hours[-1] == 5.0

    def test_reports_outside_window_ignored_in_series(self, staff_reports):
        profile = build_staff_performance("u1", staff_reports, reference_date=date(2024, 3, 31))

        assert profile.daily_hours == [0.0] * 31


class TestBuildRoster:
    """Tests for building every profile."""

    def test_one_profile_per_staff(self, staff_reports):
        roster = build_roster(staff_reports, {"u2": "Hanako"}, reference_date=REFERENCE)

        assert [p.staff_id for p in roster] == ["u1", "u2"]
        assert roster[1].staff_name == "Hanako"

    def test_profiles_frame(self, staff_reports):
        df = profiles_frame(build_roster(staff_reports, reference_date=REFERENCE))

        assert len(df) == 2
        for col in ["speed", "quality", "stability", "efficiency_score", "potential_max_items"]:
            assert col in df.columns


class TestCompositeScores:
    """Tests for derived 0-100 scores."""

    def test_speed(self):
        assert StaffPerformanceProfile("a", "A", avg_time_per_task=4.0).speed == 50.0
        assert StaffPerformanceProfile("a", "A", avg_time_per_task=1.0).speed == 100.0

    def test_quality(self):
        assert StaffPerformanceProfile("a", "A", avg_quality=4.5).quality == pytest.approx(90.0)

    def test_stability(self):
        steady = StaffPerformanceProfile("a", "A", daily_hours=[8.0, 8.0, 0.0, 8.0])
        uneven = StaffPerformanceProfile("a", "A", daily_hours=[6.0, 8.0, 0.0])

        assert steady.stability == 100.0
        assert uneven.stability == pytest.approx(85.0)

    def test_efficiency_and_fatigue_clamped(self):
        profile = StaffPerformanceProfile("a", "A", efficiency=1.4, fatigue_index=-0.2)

        assert profile.efficiency == 1.0
        assert profile.fatigue_index == 0.0
        assert profile.efficiency_score == 100.0

    def test_zero_denominators(self):
        """Missing time per task or capacity gives zero scores, not an error."""
        profile = StaffPerformanceProfile(
            "a", "A", daily_work_hours=6.0, avg_time_per_task=0.0, monthly_hours_available=0.0
        )

        assert profile.speed == 0.0
        assert profile.potential_max_items == 0
        assert profile.current_load == 0.0

        df = profiles_frame([profile])
        assert df["speed"].iloc[0] == 0.0
        assert df["potential_max_items"].iloc[0] == 0

    def test_potential_max_items(self):
        profile = StaffPerformanceProfile(
            "a", "A", monthly_hours_available=160, efficiency=0.85, avg_time_per_task=3.5
        )

        # floor(160 * 0.85 / 3.5) = floor(38.86)
        assert profile.potential_max_items == 38


class TestTeamSummary:
    """Tests for team-wide capacity."""

    def test_sample_roster(self):
        roster = sample_roster()

        team = compute_team_summary(roster)

        assert team.total_staff == 5
        assert team.total_monthly_capacity == 785
        assert team.total_monthly_deliveries == 197
        assert team.average_quality == pytest.approx((4.2 + 4.5 + 3.9 + 4.0 + 4.3) / 5)
        current = (6.5 + 7.0 + 5.5 + 6.0 + 6.8) * 22
        assert team.current_utilization == pytest.approx(current / 785)

    def test_empty_roster(self):
        team = compute_team_summary([])

        assert team.total_staff == 0
        assert team.current_utilization == 0
        assert team.average_quality == 0


class TestStaffDetailAnalysis:
    """Tests for strengths and improvement areas."""

    def test_strong_performer(self):
        tanaka = sample_roster()[0]

        analysis = get_staff_detail_analysis(tanaka)

        assert "Very high production efficiency" in analysis["strengths"]
        assert "High delivery count" in analysis["strengths"]
        assert any(s.startswith("Broad skill set") for s in analysis["strengths"])
        assert analysis["improvements"] == []
        # round(160 * 0.75 / 3.5) = round(34.29)
        assert analysis["optimal_tasks_per_month"] == 34

    def test_improvement_areas(self):
        profile = StaffPerformanceProfile(
            "a", "A",
            daily_work_hours=2.0,
            monthly_hours_available=176,
            avg_time_per_task=5.0,
            avg_quality=3.5,
            efficiency=0.7,
            specialties=["Creation"],
        )

        analysis = get_staff_detail_analysis(profile)

        assert analysis["strengths"] == []
        assert len(analysis["improvements"]) == 4
