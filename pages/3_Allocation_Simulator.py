"""
Allocation Simulator Page

Distribute a monthly task target across staff and compare scenarios.
"""
import streamlit as st
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from worklog.config import SCENARIOS, config, setup_logging
from worklog.modeling.allocation import AllocationError, compare_scenarios, simulate_task_allocation
from worklog.ui.charts import allocation_bar, kpi_gauge
from worklog.ui.formatting import fmt_count, fmt_ratio, format_metric_df
from worklog.ui.layout import render_kpi_strip, render_roster_source, section_header
from worklog.ui.state import get_state, init_state, set_state


st.set_page_config(page_title="Allocation Simulator", page_icon="🧮", layout="wide")

setup_logging()
init_state()


def main():
    st.title("Allocation Simulator")

    roster = render_roster_source()

    target_tasks = st.sidebar.number_input(
        "Target tasks this month", min_value=1, step=10, value=int(get_state("target_tasks")),
    )
    set_state("target_tasks", int(target_tasks))

    scenario = st.sidebar.radio(
        "Scenario",
        options=list(SCENARIOS),
        index=list(SCENARIOS).index(get_state("scenario")),
    )
    set_state("scenario", scenario)

    try:
        result = simulate_task_allocation(roster, int(target_tasks), scenario)
        comparison = compare_scenarios(roster, int(target_tasks))
    except AllocationError as e:
        st.error(f"Cannot allocate: {e}")
        return

    # =========================================================================
    # SECTION A: PROJECTIONS
    # =========================================================================
    section_header("Team Projection", f"Scenario: {result.scenario}")

    render_kpi_strip({
        "Team Utilisation": fmt_ratio(result.team_utilization),
        "Estimated Quality": f"{result.estimated_quality:.2f}",
        "Estimated Deliveries": fmt_count(result.estimated_deliveries),
        "Target": fmt_count(target_tasks),
    })

    allocations = result.to_frame()
    c1, c2 = st.columns([1, 3])
    with c1:
        st.plotly_chart(
            kpi_gauge(result.team_utilization * 100, target=config.optimal_load * 100, title="Projected utilisation"),
            use_container_width=True,
        )
    with c2:
        st.plotly_chart(allocation_bar(allocations), use_container_width=True)

    c1, c2 = st.columns(2)
    with c1:
        st.markdown("**Risks**")
        for item in result.risks or ["None identified"]:
            st.markdown(f"- {item}")
    with c2:
        st.markdown("**Recommendations**")
        for item in result.recommendations:
            st.markdown(f"- {item}")

    st.markdown("---")

    # =========================================================================
    # SECTION B: ALLOCATION TABLE
    # =========================================================================
    section_header("Recommended Allocation")

    st.dataframe(
        format_metric_df(allocations.drop(columns=["staff_id"])).rename(columns={
            "staff_name": "Staff",
            "current_load": "Current Load",
            "projected_load": "Projected Load",
            "recommended_tasks": "Tasks",
            "recommended_hours": "Hours",
            "capacity_remaining": "Remaining Capacity",
            "confidence": "Confidence",
            "reasoning": "Reasoning",
        }),
        use_container_width=True,
        hide_index=True,
    )

    # =========================================================================
    # SECTION C: SCENARIO COMPARISON
    # =========================================================================
    section_header("Scenario Comparison")

    st.dataframe(
        comparison,
        use_container_width=True,
        hide_index=True,
        column_config={
            "team_utilization": st.column_config.NumberColumn("Utilisation", format="%.2f"),
            "estimated_quality": st.column_config.NumberColumn("Quality", format="%.2f"),
        },
    )


if __name__ == "__main__":
    main()
