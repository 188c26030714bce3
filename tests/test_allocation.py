"""
Tests for the allocation simulator.
"""
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from worklog.config import SCENARIOS
from worklog.data.fixtures import sample_roster
from worklog.data.models import StaffPerformanceProfile
from worklog.modeling.allocation import (
    AllocationError,
    apply_scenario_weighting,
    compare_scenarios,
    compute_confidence,
    generate_allocation_recommendations,
    score_roster,
    simulate_task_allocation,
)


def make_profile(staff_id="a", **overrides):
    values = dict(
        staff_id=staff_id,
        staff_name=f"Staff {staff_id.upper()}",
        daily_work_hours=5.0,
        monthly_hours_available=176.0,
        monthly_deliveries=30,
        avg_time_per_task=4.0,
        avg_quality=4.0,
        efficiency=0.8,
        fatigue_index=0.1,
        specialties=["Creation", "Banner", "Video"],
    )
    values.update(overrides)
    return StaffPerformanceProfile(**values)


class TestConfidence:
    """Tests for confidence around the optimal load."""

    def test_peak_at_optimal_load(self):
        assert compute_confidence(0.75) == 1.0

    def test_zero_at_or_beyond_half_unit(self):
        assert compute_confidence(0.25) == 0.0
        assert compute_confidence(1.25) == 0.0
        assert compute_confidence(0.0) == 0.0
        assert compute_confidence(2.0) == 0.0

    def test_linear_between(self):
        assert compute_confidence(0.5) == pytest.approx(0.5)
        assert compute_confidence(1.0) == pytest.approx(0.5)


class TestScoring:
    """Tests for staff scoring."""

    def test_score_formula(self):
        scored = score_roster([make_profile()])

        # 176 / 4 * 0.8 = 35.2 potential; * 0.8 quality; * 0.9 fatigue
        assert scored["potential"].iloc[0] == pytest.approx(35.2)
        assert scored["score"].iloc[0] == pytest.approx(35.2 * 0.8 * 0.9)

    def test_empty_roster_rejected(self):
        with pytest.raises(AllocationError):
            score_roster([])

    def test_zero_time_per_task_rejected(self):
        with pytest.raises(AllocationError, match="Average time per task"):
            score_roster([make_profile(avg_time_per_task=0)])

    def test_zero_capacity_rejected(self):
        with pytest.raises(AllocationError, match="Monthly available hours"):
            score_roster([make_profile(monthly_hours_available=0)])


class TestGenerateRecommendations:
    """Tests for proportional task distribution."""

    def test_equal_staff_split_evenly(self):
        roster = [make_profile("a"), make_profile("b")]

        result = generate_allocation_recommendations(roster, 10)

        assert [a.recommended_tasks for a in result] == [5, 5]
        assert [a.recommended_hours for a in result] == [20.0, 20.0]

    def test_higher_score_gets_more_tasks(self):
        roster = [make_profile("a", avg_quality=5.0), make_profile("b", avg_quality=2.5)]

        result = generate_allocation_recommendations(roster, 30)

        assert result[0].recommended_tasks == 20
        assert result[1].recommended_tasks == 10

    def test_sum_within_rounding_tolerance(self):
        roster = sample_roster()

        for target in [1, 7, 50, 100, 199, 200, 333]:
            result = generate_allocation_recommendations(roster, target)
            total = sum(a.recommended_tasks for a in result)
            assert abs(total - target) <= len(roster)

    def test_loads(self):
        result = generate_allocation_recommendations([make_profile()], 10)[0]

        # 5h * 22 days = 110h current, + 40h recommended
        assert result.current_load == pytest.approx(110 / 176)
        assert result.projected_load == pytest.approx(150 / 176)
        assert result.capacity_remaining == pytest.approx(66.0)

    def test_one_entry_per_staff_in_order(self):
        roster = sample_roster()

        result = generate_allocation_recommendations(roster, 100)

        assert [a.staff_id for a in result] == [p.staff_id for p in roster]

    def test_scenario_changes_split(self):
        """Speed-focused weights by efficiency twice: 2:1 becomes 4:1."""
        roster = [make_profile("a", efficiency=0.9), make_profile("b", efficiency=0.45)]

        balanced = generate_allocation_recommendations(roster, 30)
        speed = generate_allocation_recommendations(roster, 30, "speed-focused")

        assert [a.recommended_tasks for a in balanced] == [20, 10]
        assert [a.recommended_tasks for a in speed] == [24, 6]

    def test_scenario_loads_use_real_capacity(self):
        """Weighted capacity only feeds the score, never the loads."""
        result = generate_allocation_recommendations([make_profile()], 5, "speed-focused")[0]

        assert result.current_load == pytest.approx(110 / 176)
        assert result.projected_load == pytest.approx(130 / 176)
        assert result.capacity_remaining == pytest.approx(66.0)

    def test_zero_efficiency_member_in_speed_scenario(self):
        roster = [make_profile("a"), make_profile("b", efficiency=0.0)]

        result = generate_allocation_recommendations(roster, 10, "speed-focused")

        assert [a.recommended_tasks for a in result] == [10, 0]

    def test_non_positive_target_rejected(self):
        with pytest.raises(AllocationError):
            generate_allocation_recommendations([make_profile()], 0)
        with pytest.raises(AllocationError):
            generate_allocation_recommendations([make_profile()], -5)

    def test_zero_total_score_rejected(self):
        with pytest.raises(AllocationError, match="score is zero"):
            generate_allocation_recommendations([make_profile(avg_quality=0)], 10)


class TestReasoning:
    """Tests for per-staff reasoning text."""

    def test_very_high_load(self):
        result = generate_allocation_recommendations([make_profile(daily_work_hours=8.0)], 5)[0]

        assert "very high" in result.reasoning
        assert "Fatigue index 10%" in result.reasoning

    def test_spare_capacity(self):
        result = generate_allocation_recommendations([make_profile(daily_work_hours=1.0)], 5)[0]

        assert "spare capacity" in result.reasoning
        assert "Quality factor 80%" in result.reasoning

    def test_well_balanced(self):
        result = generate_allocation_recommendations([make_profile()], 5)[0]

        # (110 + 20) / 176 = 74%
        assert "well balanced" in result.reasoning
        assert "strongest at: Creation" in result.reasoning


class TestScenarioWeighting:
    """Tests for scenario pre-weighting."""

    def test_balanced_unchanged(self):
        roster = [make_profile()]

        result = apply_scenario_weighting(roster, "balanced")

        assert result[0].efficiency == 0.8
        assert result[0].monthly_hours_available == 176.0

    def test_quality_focused_scales_efficiency(self):
        roster = [make_profile(avg_quality=4.0, efficiency=0.8)]

        result = apply_scenario_weighting(roster, "quality-focused")

        assert result[0].efficiency == pytest.approx(0.64)
        assert roster[0].efficiency == 0.8

    def test_speed_focused_scales_capacity(self):
        roster = [make_profile(efficiency=0.5)]

        result = apply_scenario_weighting(roster, "speed-focused")

        assert result[0].monthly_hours_available == pytest.approx(88.0)
        assert roster[0].monthly_hours_available == 176.0


class TestSimulateTaskAllocation:
    """Tests for full scenario simulation."""

    def test_overloaded_staff_flagged_as_risk(self):
        roster = sample_roster()

        result = simulate_task_allocation(roster, 100)

        risk = [r for r in result.risks if r.startswith("High projected load for:")]
        assert len(risk) == 1
        for profile in roster:
            assert profile.staff_name in risk[0]

    def test_underloaded_staff_recommended(self):
        roster = [make_profile("a", daily_work_hours=1.0), make_profile("b", daily_work_hours=1.0)]

        result = simulate_task_allocation(roster, 10)

        extra = [r for r in result.recommendations if r.startswith("Can take on more tasks:")]
        assert extra == ["Can take on more tasks: Staff A, Staff B"]
        assert not any(r.startswith("High projected load") for r in result.risks)

    def test_balanced_notes(self):
        result = simulate_task_allocation([make_profile()], 5)

        assert result.scenario == "balanced"
        assert result.risks == []
        assert len(result.recommendations) == 2

    def test_scenario_risks(self):
        roster = [make_profile()]

        assert len(simulate_task_allocation(roster, 5, "quality-focused").risks) == 1
        assert len(simulate_task_allocation(roster, 5, "speed-focused").risks) == 2

    def test_speed_focused_no_false_overload(self):
        """130h of 176h is 74% load, so no overload warning in any scenario."""
        for scenario in SCENARIOS:
            result = simulate_task_allocation([make_profile()], 5, scenario)

            assert not any(r.startswith("High projected load") for r in result.risks)
            assert result.allocations[0].projected_load == pytest.approx(result.team_utilization)
            assert "well balanced" in result.allocations[0].reasoning

    def test_quality_focused_reasoning_shows_real_efficiency(self):
        result = simulate_task_allocation([make_profile(efficiency=0.8)], 5, "quality-focused")

        assert "Efficiency 80%" in result.allocations[0].reasoning

    def test_team_projections(self):
        roster = [make_profile("a"), make_profile("b")]

        result = simulate_task_allocation(roster, 10)

        assert result.estimated_deliveries == 10
        assert result.team_utilization == pytest.approx(130 / 176)
        assert result.estimated_quality == pytest.approx(4.0)

    def test_quality_penalty_for_overloaded_staff(self):
        """Staff already above 90% load deliver at 90% of their usual quality."""
        roster = [make_profile(daily_work_hours=8.5, avg_quality=5.0)]

        result = simulate_task_allocation(roster, 10)

        assert result.estimated_quality == pytest.approx(4.5)

    def test_unknown_scenario_rejected(self):
        with pytest.raises(AllocationError, match="Unknown scenario"):
            simulate_task_allocation([make_profile()], 10, "cheapest")

    def test_empty_roster_rejected(self):
        with pytest.raises(AllocationError):
            simulate_task_allocation([], 10)

    def test_input_roster_not_modified(self):
        roster = sample_roster()
        before = [p.to_dict() for p in roster]

        simulate_task_allocation(roster, 200, "speed-focused")

        assert [p.to_dict() for p in roster] == before

    def test_to_frame(self):
        result = simulate_task_allocation(sample_roster(), 100)

        df = result.to_frame()

        assert len(df) == 5
        assert "recommended_tasks" in df.columns
        assert "reasoning" in df.columns


class TestCompareScenarios:
    """Tests for the scenario comparison table."""

    def test_one_row_per_scenario(self):
        result = compare_scenarios(sample_roster(), 200)

        assert list(result["scenario"]) == list(SCENARIOS)
        assert (result["estimated_deliveries"] > 0).all()
