"""
Staff Performance Page

Team capacity summary, per-staff composite scores and detail analysis.
"""
import streamlit as st
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from worklog.config import setup_logging
from worklog.metrics.performance import compute_team_summary, get_staff_detail_analysis, profiles_frame
from worklog.ui.charts import daily_hours_line, score_radar
from worklog.ui.formatting import fmt_count, fmt_hours, fmt_quality, fmt_ratio, load_status, status_dot
from worklog.ui.layout import render_kpi_strip, render_roster_source, section_header
from worklog.ui.state import init_state


st.set_page_config(page_title="Staff Performance", page_icon="👥", layout="wide")

setup_logging()
init_state()


def main():
    st.title("Staff Performance")

    roster = render_roster_source()
    if not roster:
        st.info("No staff profiles available.")
        return

    # =========================================================================
    # SECTION A: TEAM SUMMARY
    # =========================================================================
    section_header("Team Summary", "Current month, 22 working days")

    team = compute_team_summary(roster)
    render_kpi_strip({
        "Staff": fmt_count(team.total_staff),
        "Monthly Capacity": fmt_hours(team.total_monthly_capacity),
        "Utilisation": fmt_ratio(team.current_utilization),
        "Avg Quality": fmt_quality(team.average_quality),
        "Deliveries": fmt_count(team.total_monthly_deliveries),
    })

    profiles = profiles_frame(roster)
    profiles["load"] = [p.current_load for p in roster]
    profiles["status"] = [f"{status_dot(load_status(v))} {load_status(v)}" for v in profiles["load"]]

    st.dataframe(
        profiles[[
            "staff_name", "status", "load", "monthly_deliveries", "avg_time_per_task",
            "avg_quality", "speed", "quality", "stability", "efficiency_score",
        ]].rename(columns={
            "staff_name": "Staff",
            "status": "Status",
            "load": "Load",
            "monthly_deliveries": "Deliveries",
            "avg_time_per_task": "Hours / Task",
            "avg_quality": "Quality (1-5)",
            "speed": "Speed",
            "quality": "Quality",
            "stability": "Stability",
            "efficiency_score": "Efficiency",
        }),
        use_container_width=True,
        hide_index=True,
        column_config={
            "Load": st.column_config.NumberColumn(format="%.2f"),
            "Hours / Task": st.column_config.NumberColumn(format="%.1f"),
            "Quality (1-5)": st.column_config.NumberColumn(format="%.1f"),
            "Speed": st.column_config.ProgressColumn(min_value=0, max_value=100, format="%.0f"),
            "Quality": st.column_config.ProgressColumn(min_value=0, max_value=100, format="%.0f"),
            "Stability": st.column_config.ProgressColumn(min_value=0, max_value=100, format="%.0f"),
            "Efficiency": st.column_config.ProgressColumn(min_value=0, max_value=100, format="%.0f"),
        },
    )

    st.markdown("---")

    # =========================================================================
    # SECTION B: STAFF DETAIL
    # =========================================================================
    section_header("Staff Detail")

    by_name = {p.staff_name: p for p in roster}
    selected = st.selectbox("Staff member", options=list(by_name))
    profile = by_name[selected]
    row = profiles[profiles["staff_id"] == profile.staff_id].iloc[0]

    c1, c2 = st.columns(2)
    with c1:
        st.plotly_chart(score_radar(row, title=profile.staff_name), use_container_width=True)
    with c2:
        st.plotly_chart(daily_hours_line(profile.daily_hours, profile.staff_name), use_container_width=True)

    analysis = get_staff_detail_analysis(profile)

    c1, c2, c3 = st.columns(3)
    with c1:
        st.markdown("**Strengths**")
        for item in analysis["strengths"] or ["None identified"]:
            st.markdown(f"- {item}")
    with c2:
        st.markdown("**Improvement areas**")
        for item in analysis["improvements"] or ["None identified"]:
            st.markdown(f"- {item}")
    with c3:
        st.metric("Optimal tasks / month", fmt_count(analysis["optimal_tasks_per_month"]))
        st.caption(f"Specialties: {', '.join(profile.specialties)}")


if __name__ == "__main__":
    main()
