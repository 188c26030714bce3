"""
Consistent number and display formatting.
"""
import pandas as pd
from typing import Union

from worklog.config import config


# =============================================================================
# NUMBER FORMATTERS
# =============================================================================

def fmt_hours(value: Union[float, int, None]) -> str:
    """Format hours: 1,234.5"""
    if value is None or pd.isna(value):
        return "—"
    return f"{value:,.1f}"


def fmt_percent(value: Union[float, int, None], decimals: int = 1) -> str:
    """Format percentage: 12.3%"""
    if value is None or pd.isna(value):
        return "—"
    return f"{value:,.{decimals}f}%"


def fmt_ratio(value: Union[float, int, None], decimals: int = 0) -> str:
    """Format a 0-1 ratio as a percentage: 0.753 -> 75%"""
    if value is None or pd.isna(value):
        return "—"
    return fmt_percent(value * 100, decimals)


def fmt_count(value: Union[float, int, None]) -> str:
    """Format count: 1,234"""
    if value is None or pd.isna(value):
        return "—"
    return f"{int(value):,}"


def fmt_quality(value: Union[float, int, None]) -> str:
    """Format average quality: 3.8 / 5, or an ungraded marker."""
    if value is None or pd.isna(value) or value == 0:
        return "Ungraded"
    return f"{value:.1f} / 5"


# =============================================================================
# STATUS INDICATORS
# =============================================================================

def load_status(load: float) -> str:
    """Classify a load ratio as Overloaded / Balanced / Under-utilised."""
    if load is None or pd.isna(load):
        return "Unknown"
    if load > config.overload_warning_threshold:
        return "Overloaded"
    if load < config.underload_warning_threshold:
        return "Under-utilised"
    return "Balanced"


def status_dot(status: str) -> str:
    """Return a colored status dot emoji."""
    return {
        "Overloaded": "🔴",
        "Balanced": "🟢",
        "Under-utilised": "🟡",
    }.get(status, "⚪")


# =============================================================================
# DATAFRAME FORMATTING
# =============================================================================

def format_metric_df(df: pd.DataFrame) -> pd.DataFrame:
    """
    Format a metrics DataFrame for display.

    Hours and quality columns become strings; other columns are left as is.
    """
    df = df.copy()

    for col in ["total_hours", "create_hours", "fix_hours", "correction_hours", "recommended_hours",
                "capacity_remaining"]:
        if col in df.columns:
            df[col] = df[col].apply(fmt_hours)

    if "average_quality" in df.columns:
        df["average_quality"] = df["average_quality"].apply(fmt_quality)

    for col in ["current_load", "projected_load", "confidence"]:
        if col in df.columns:
            df[col] = df[col].apply(fmt_ratio)

    if "task_count" in df.columns:
        df["task_count"] = df["task_count"].apply(fmt_count)

    return df
