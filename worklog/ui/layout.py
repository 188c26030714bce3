"""
Layout components: section headers, sidebar filters, KPI strip.
"""
import streamlit as st
from datetime import date
from typing import Dict, List, Optional, Sequence

from worklog.data.fixtures import sample_roster
from worklog.data.loader import get_data_status, load_reports, load_users, staff_name_map
from worklog.data.models import DailyReport, StaffPerformanceProfile
from worklog.metrics.performance import build_roster
from worklog.metrics.report_analytics import default_staff_name, filter_reports
from worklog.ui.state import get_state, set_state


def section_header(title: str, description: Optional[str] = None):
    """Render section header with optional description."""
    st.subheader(title)
    if description:
        st.caption(description)


def render_kpi_strip(metrics: Dict[str, str]):
    """Render a row of st.metric cards from label -> formatted value."""
    cols = st.columns(len(metrics))
    for col, (label, value) in zip(cols, metrics.items()):
        with col:
            st.metric(label, value)


def render_report_filters(reports: Sequence[DailyReport],
                          staff_names: Dict[str, str]) -> List[DailyReport]:
    """
    Sidebar staff and date-range filters. Returns the filtered reports.
    """
    st.sidebar.markdown("### Filters")

    staff_ids = sorted({r.staff_id for r in reports})
    options = ["All"] + staff_ids
    current = get_state("selected_staff")
    selected = st.sidebar.selectbox(
        "Staff",
        options=options,
        index=options.index(current) if current in options else 0,
        format_func=lambda sid: sid if sid == "All" else staff_names.get(sid, default_staff_name(sid)),
    )
    set_state("selected_staff", None if selected == "All" else selected)

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    if reports:
        first = min(r.report_date for r in reports)
        last = max(r.report_date for r in reports)
        picked = st.sidebar.date_input("Date range", value=(first, last), min_value=first, max_value=last)
        if isinstance(picked, (tuple, list)) and len(picked) == 2:
            start_date, end_date = picked

    return filter_reports(
        reports,
        staff_id=get_state("selected_staff"),
        start_date=start_date,
        end_date=end_date,
    )


def render_roster_source() -> List[StaffPerformanceProfile]:
    """
    Sidebar choice between profiles built from loaded reports and the sample roster.
    Falls back to the sample roster when no report data is available.
    """
    has_reports = get_data_status()["task_reports"]["exists"]
    use_sample = st.sidebar.checkbox(
        "Use sample roster",
        value=get_state("use_sample_roster") or not has_reports,
        disabled=not has_reports,
    )
    set_state("use_sample_roster", use_sample)

    if use_sample or not has_reports:
        return sample_roster()

    reports = load_reports()
    return build_roster(reports, staff_name_map(load_users()))
