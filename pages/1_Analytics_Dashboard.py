"""
Analytics Dashboard Page

Overall summary, per-staff and per-task report metrics, KPI charts.
"""
import streamlit as st
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from worklog.config import setup_logging
from worklog.data.loader import load_reports, load_users, staff_name_map
from worklog.data.semantic import reports_to_task_frame
from worklog.metrics.kpi import transform_kpi_for_charts
from worklog.metrics.report_analytics import (
    analyze_by_staff,
    analyze_by_task,
    calculate_summary,
    get_top_tasks_by_hours,
)
from worklog.ui.charts import category_hours_bar, donut, horizontal_bar, time_series
from worklog.ui.formatting import fmt_count, fmt_hours, fmt_quality, format_metric_df
from worklog.ui.layout import render_kpi_strip, render_report_filters, section_header
from worklog.ui.state import init_state


st.set_page_config(page_title="Analytics Dashboard", page_icon="📈", layout="wide")

setup_logging()
init_state()


def main():
    st.title("Analytics Dashboard")

    reports = load_reports()
    names = staff_name_map(load_users())
    reports = render_report_filters(reports, names)

    if not reports:
        st.info("No reports match the current filters.")
        return

    # =========================================================================
    # SECTION A: SUMMARY
    # =========================================================================
    section_header("Summary", f"{len(reports)} reports")

    summary = calculate_summary(reports)
    render_kpi_strip({
        "Total Hours": fmt_hours(summary["total_hours"]),
        "Create": fmt_hours(summary["create_hours"]),
        "Fix": fmt_hours(summary["fix_hours"]),
        "Correction": fmt_hours(summary["correction_hours"]),
        "Avg Quality": fmt_quality(summary["average_quality"]),
        "Tasks": fmt_count(summary["task_count"]),
    })

    st.markdown("---")

    # =========================================================================
    # SECTION B: BY STAFF
    # =========================================================================
    section_header("By Staff")

    by_staff = analyze_by_staff(reports, names)
    st.plotly_chart(category_hours_bar(by_staff), use_container_width=True)
    st.dataframe(format_metric_df(by_staff.drop(columns=["staff_id"])), use_container_width=True, hide_index=True)

    # =========================================================================
    # SECTION C: BY TASK
    # =========================================================================
    section_header("By Task")

    by_task = analyze_by_task(reports).sort_values("total_hours", ascending=False)
    st.plotly_chart(
        horizontal_bar(get_top_tasks_by_hours(reports, n=15), x="total_hours", y="task_name", title="Hours by task"),
        use_container_width=True,
    )
    st.dataframe(format_metric_df(by_task), use_container_width=True, hide_index=True)

    st.markdown("---")

    # =========================================================================
    # SECTION D: KPI CHARTS
    # =========================================================================
    section_header("KPI Charts")

    kpis = transform_kpi_for_charts(reports_to_task_frame(reports), names)

    st.plotly_chart(
        time_series(kpis["daily_line"], x="report_date", y="hours", color="staff", title="Daily hours"),
        use_container_width=True,
    )

    c1, c2, c3 = st.columns(3)
    with c1:
        st.plotly_chart(donut(kpis["avg_task_time"], "staff", "avg_hours", title="Avg hours per task"),
                        use_container_width=True)
    with c2:
        st.plotly_chart(horizontal_bar(kpis["completion_rate"], x="rate_pct", y="staff", title="Completion rate (%)"),
                        use_container_width=True)
    with c3:
        st.plotly_chart(horizontal_bar(kpis["fix_rate"], x="rate_pct", y="staff", title="Fix share of hours (%)"),
                        use_container_width=True)


if __name__ == "__main__":
    main()
