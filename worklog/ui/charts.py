"""
Standard chart wrappers using Plotly.
"""
import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
from typing import List, Optional

from worklog.config import config


# =============================================================================
# CHART THEME
# =============================================================================

CHART_COLORS = {
    "primary": "#1f77b4",
    "secondary": "#ff7f0e",
    "success": "#28a745",
    "warning": "#ffc107",
    "danger": "#dc3545",
    "neutral": "#6c757d",
    "light": "#f8f9fa",
}

CHART_TEMPLATE = "plotly_white"

DEFAULT_LAYOUT = {
    "template": CHART_TEMPLATE,
    "font": {"family": "Arial, sans-serif", "size": 12},
    "margin": {"l": 50, "r": 30, "t": 40, "b": 50},
    "hoverlabel": {"bgcolor": "white"},
}


def apply_layout(fig: go.Figure, **kwargs) -> go.Figure:
    """Apply standard layout to figure."""
    layout = {**DEFAULT_LAYOUT, **kwargs}
    fig.update_layout(**layout)
    return fig


# =============================================================================
# KPI CHARTS
# =============================================================================

def kpi_gauge(value: float, target: Optional[float] = None,
              title: str = "", suffix: str = "%",
              color: str = "primary") -> go.Figure:
    """
    Create a gauge chart for KPI display.
    """
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=value,
        title={"text": title},
        number={"suffix": suffix},
        gauge={
            "axis": {"range": [0, 150] if suffix == "%" else [None, None]},
            "bar": {"color": CHART_COLORS.get(color, color)},
            "threshold": {
                "line": {"color": CHART_COLORS["danger"], "width": 2},
                "value": target,
            } if target else None,
        },
    ))

    return apply_layout(fig, height=220)


# =============================================================================
# BAR CHARTS
# =============================================================================

def horizontal_bar(df: pd.DataFrame, x: str, y: str,
                   title: str = "", color: Optional[str] = None,
                   text: Optional[str] = None) -> go.Figure:
    """
    Create horizontal bar chart.
    """
    fig = px.bar(
        df, x=x, y=y, orientation="h",
        title=title,
        color=color,
        text=text,
    )

    fig.update_traces(textposition="outside")
    fig.update_layout(yaxis={"categoryorder": "total ascending"})

    return apply_layout(fig)


def grouped_bar(df: pd.DataFrame, x: str, y: List[str],
                title: str = "", barmode: str = "group") -> go.Figure:
    """
    Create grouped or stacked bar chart.
    """
    fig = go.Figure()

    colors = list(CHART_COLORS.values())

    for i, col in enumerate(y):
        fig.add_trace(go.Bar(
            name=col,
            x=df[x],
            y=df[col],
            marker_color=colors[i % len(colors)],
        ))

    fig.update_layout(barmode=barmode, title=title)

    return apply_layout(fig)


def category_hours_bar(staff_df: pd.DataFrame, title: str = "Hours by task type") -> go.Figure:
    """Stacked create/fix/correction hours per staff member."""
    renamed = staff_df.rename(columns={
        "create_hours": "Create",
        "fix_hours": "Fix",
        "correction_hours": "Correction",
    })
    return grouped_bar(renamed, "staff_name", ["Create", "Fix", "Correction"], title=title, barmode="stack")


def load_color(load: float) -> str:
    if load > config.overload_warning_threshold:
        return CHART_COLORS["danger"]
    if load < config.underload_warning_threshold:
        return CHART_COLORS["warning"]
    return CHART_COLORS["success"]


def allocation_bar(allocations: pd.DataFrame, title: str = "Projected load after allocation") -> go.Figure:
    """
    Current vs projected load per staff member, with the optimal load marked.
    """
    fig = go.Figure()

    fig.add_trace(go.Bar(
        name="Current load",
        x=allocations["staff_name"],
        y=allocations["current_load"] * 100,
        marker_color=CHART_COLORS["neutral"],
    ))
    fig.add_trace(go.Bar(
        name="Projected load",
        x=allocations["staff_name"],
        y=allocations["projected_load"] * 100,
        marker_color=[load_color(v) for v in allocations["projected_load"]],
        text=[f"{v:.0f}%" for v in allocations["projected_load"] * 100],
        textposition="outside",
    ))

    fig.add_hline(
        y=config.optimal_load * 100,
        line_dash="dash",
        line_color=CHART_COLORS["primary"],
        annotation_text="Optimal",
    )

    fig.update_layout(barmode="group", title=title, yaxis_title="Load (%)")

    return apply_layout(fig)


# =============================================================================
# TIME SERIES
# =============================================================================

def time_series(df: pd.DataFrame, x: str, y: str,
                color: Optional[str] = None,
                title: str = "") -> go.Figure:
    """
    Create line chart for time series.
    """
    fig = px.line(df, x=x, y=y, color=color, title=title, markers=True)

    fig.update_layout(hovermode="x unified")

    return apply_layout(fig)


def daily_hours_line(daily_hours: List[float], staff_name: str = "") -> go.Figure:
    """Daily hours over the history window with the high-workload line marked."""
    df = pd.DataFrame({
        "day": list(range(1, len(daily_hours) + 1)),
        "hours": daily_hours,
    })
    fig = time_series(df, "day", "hours", title=f"Daily hours: {staff_name}" if staff_name else "Daily hours")
    fig.add_hline(
        y=config.high_workload_hours,
        line_dash="dot",
        line_color=CHART_COLORS["danger"],
        annotation_text="High workload",
    )
    return fig


def score_radar(profile_row: pd.Series, title: str = "") -> go.Figure:
    """Radar of the four composite scores (0-100)."""
    labels = ["Speed", "Quality", "Stability", "Efficiency"]
    values = [
        profile_row["speed"],
        profile_row["quality"],
        profile_row["stability"],
        profile_row["efficiency_score"],
    ]
    fig = go.Figure(go.Scatterpolar(
        r=values + values[:1],
        theta=labels + labels[:1],
        fill="toself",
        line={"color": CHART_COLORS["primary"]},
    ))
    fig.update_layout(polar={"radialaxis": {"range": [0, 100]}}, title=title, showlegend=False)
    return apply_layout(fig, height=320)


def donut(df: pd.DataFrame, labels: str, values: str, title: str = "") -> go.Figure:
    """Donut chart for shares."""
    fig = go.Figure(go.Pie(labels=df[labels], values=df[values], hole=0.5))
    fig.update_layout(title=title)
    return apply_layout(fig)
