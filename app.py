"""
Staff Worklog Analytics

Main entry point for Streamlit app.
"""
import streamlit as st
from pathlib import Path
from datetime import datetime, timezone

# Page config must be first Streamlit command
st.set_page_config(
    page_title="Staff Worklog Analytics",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)

import sys
sys.path.insert(0, str(Path(__file__).parent))

from worklog.config import config, setup_logging
from worklog.data.loader import get_data_status, load_reports, load_users, staff_name_map
from worklog.data.models import ReportFormatError
from worklog.data.schema import SchemaValidationError
from worklog.metrics.report_analytics import calculate_summary
from worklog.ui.formatting import fmt_count, fmt_hours, fmt_quality
from worklog.ui.state import init_state


def main():
    """Main app entry point."""
    setup_logging()
    init_state()

    st.title("Staff Worklog Analytics")
    st.caption("Daily reports → staff and task analytics → allocation simulation")

    status = get_data_status()

    if not status["task_reports"]["exists"]:
        st.warning("No report data found.")
        st.markdown(f"""
        ### Setup

        Place an export of the report store in: `{config.processed_dir}`

        - `task_reports.parquet` / `.csv` (one row per task) or `task_reports.json` (report documents)
        - `users.parquet` / `.csv` / `.json` (optional, for display names)

        Check the files with `python scripts/validate_inputs.py`.
        """)
        st.info("The Allocation Simulator page can still run on the sample roster.")
        st.page_link("pages/3_Allocation_Simulator.py", label="Allocation Simulator", icon="🧮")
        return

    with st.expander("Data fingerprint", expanded=False):
        rows = []
        for key, info in status.items():
            if info["exists"]:
                path = info["path"]
                mtime = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
                rows.append({
                    "table": key,
                    "file": path.name,
                    "size_mb": round(path.stat().st_size / (1024 * 1024), 2),
                    "modified_utc": mtime.strftime("%Y-%m-%d %H:%M"),
                })
        st.dataframe(rows, use_container_width=True)

    with st.spinner("Loading reports..."):
        try:
            reports = load_reports()
            names = staff_name_map(load_users())
        except (ReportFormatError, SchemaValidationError) as e:
            st.error(f"Error loading data: {e}")
            return

    st.markdown("---")

    col1, col2 = st.columns([1, 4])

    with col1:
        st.markdown("### Quick Links")
        st.page_link("pages/1_Analytics_Dashboard.py", label="Analytics Dashboard", icon="📈")
        st.page_link("pages/2_Staff_Performance.py", label="Staff Performance", icon="👥")
        st.page_link("pages/3_Allocation_Simulator.py", label="Allocation Simulator", icon="🧮")

    with col2:
        st.markdown("### Data Overview")

        summary = calculate_summary(reports)

        c1, c2, c3, c4 = st.columns(4)
        with c1:
            st.metric("Reports", fmt_count(len(reports)))
        with c2:
            st.metric("Staff", fmt_count(len({r.staff_id for r in reports})))
        with c3:
            st.metric("Total Hours", fmt_hours(summary["total_hours"]))
        with c4:
            st.metric("Avg Quality", fmt_quality(summary["average_quality"]))

        if reports:
            first = min(r.report_date for r in reports)
            last = max(r.report_date for r in reports)
            st.caption(f"Reports from {first:%d %b %Y} to {last:%d %b %Y}; "
                       f"{len(names)} staff in the user directory.")


if __name__ == "__main__":
    main()
