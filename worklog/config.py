"""
Application configuration management.
"""
import logging
import os
from pathlib import Path
from dataclasses import dataclass, field


def _default_data_dir() -> Path:
    env_dir = os.getenv("DATA_DIR")
    if env_dir:
        return Path(env_dir)
    return Path("./data")


@dataclass
class AppConfig:
    """Application configuration with environment overrides."""

    # Paths
    data_dir: Path = field(default_factory=_default_data_dir)

    # Environment
    app_env: str = field(default_factory=lambda: os.getenv("APP_ENV", "dev"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # Cache settings
    cache_ttl_seconds: int = field(default_factory=lambda: int(os.getenv("CACHE_TTL_SECONDS", "3600")))

    # Capacity model
    working_days_per_month: int = 22
    standard_daily_hours: float = 8.0
    history_days: int = 31
    high_workload_hours: float = 8.0

    # Profile fallbacks when a staff member has no usable history
    default_avg_quality: float = 3.0
    default_avg_time_per_task: float = 4.0
    default_efficiency: float = 0.8
    default_fatigue_index: float = 0.1

    # Allocation policy
    optimal_load: float = 0.75
    overload_reasoning_threshold: float = 0.95
    underload_reasoning_threshold: float = 0.70
    overload_warning_threshold: float = 0.85
    underload_warning_threshold: float = 0.5
    quality_penalty_load: float = 0.9
    quality_penalty_factor: float = 0.9

    @property
    def processed_dir(self) -> Path:
        return self.data_dir / "processed"

    @property
    def monthly_hours_available(self) -> float:
        return self.working_days_per_month * self.standard_daily_hours


# Global config instance
config = AppConfig()


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

TASK_TYPES = ("create", "fix", "correction")

SCENARIOS = ("balanced", "quality-focused", "speed-focused")

UNKNOWN_TASK_NAME = "Unknown task"

# Data file names (extension resolved by the loader)
DATA_FILES = {
    "task_reports": "task_reports",
    "users": "users",
}

# Required columns (hard fail if missing)
REQUIRED_COLUMNS = {
    "task_reports": [
        "report_id",
        "staff_id",
        "report_date",
        "task_name",
        "task_type",
        "duration_hrs",
    ],
    "users": [
        "staff_id",
        "name",
    ],
}

# Optional columns (soft warn if missing)
OPTIONAL_COLUMNS = {
    "task_reports": [
        "quality_score",
        "is_completed",
        "account_name",
        "learnings",
    ],
    "users": [
        "role",
        "email",
        "daily_available_hours",
    ],
}


def setup_logging(level: str = None) -> None:
    """Configure root logging once for an entry point (app or script)."""
    logging.basicConfig(
        level=(level or config.log_level).upper(),
        format=LOG_FORMAT,
    )
