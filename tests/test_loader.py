"""
Tests for reading reports and users from disk.
"""
import json
import pytest
import pandas as pd
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from worklog.data.loader import (
    frame_to_reports,
    get_data_status,
    read_reports,
    read_users,
    resolve_data_file,
    staff_name_map,
)
from worklog.data.models import ReportFormatError
from worklog.data.schema import SchemaValidationError


@pytest.fixture
def task_table():
    return pd.DataFrame({
        "report_id": ["r1", "r1", "r2", "r3"],
        "staff_id": ["u1", "u1", "u2", "u3"],
        "report_date": ["2024-01-10", "2024-01-10", "2024-01-11", "2024-01-12"],
        "task_name": ["Banner", "Video", "Caption", None],
        "task_type": ["create", "fix", "correction", None],
        "duration_hrs": [2.5, 1.0, 3.0, None],
        "quality_score": ["4", "-", "3", None],
        "is_completed": [True, False, True, None],
    })


class TestFrameToReports:
    """Tests for rebuilding reports from a flat task table."""

    def test_groups_rows_by_report(self, task_table):
        reports = frame_to_reports(task_table)

        assert [r.report_id for r in reports] == ["r1", "r2", "r3"]
        assert len(reports[0].tasks) == 2
        assert reports[0].report_date == date(2024, 1, 10)

    def test_task_fields(self, task_table):
        first, second = frame_to_reports(task_table)[0].tasks

        assert first.quality_score == 4
        assert second.quality_score is None
        assert second.is_completed is False

    def test_report_without_tasks(self, task_table):
        """A row with no task fields is a report with zero tasks."""
        reports = frame_to_reports(task_table)

        assert reports[2].staff_id == "u3"
        assert reports[2].tasks == ()

    def test_missing_columns_rejected(self, task_table):
        with pytest.raises(SchemaValidationError):
            frame_to_reports(task_table.drop(columns=["duration_hrs"]))

    def test_bad_date_rejected(self, task_table):
        task_table.loc[0, "report_date"] = "soon"

        with pytest.raises(ReportFormatError, match="r1"):
            frame_to_reports(task_table)


class TestReadFiles:
    """Tests for file format dispatch."""

    def test_read_csv(self, tmp_path, task_table):
        path = tmp_path / "task_reports.csv"
        task_table.to_csv(path, index=False)

        reports = read_reports(path)

        assert len(reports) == 3
        assert reports[0].total_hours == 3.5

    def test_read_json_documents(self, tmp_path):
        path = tmp_path / "task_reports.json"
        path.write_text(json.dumps({"reports": [
            {"id": "a", "userId": "u1", "date": "2024-01-10",
             "tasks": [{"taskType": "create", "durationHrs": 2, "qualityScore": 5}]},
        ]}))

        reports = read_reports(path)

        assert len(reports) == 1
        assert reports[0].tasks[0].quality_score == 5

    def test_json_must_hold_a_list(self, tmp_path):
        path = tmp_path / "task_reports.json"
        path.write_text(json.dumps({"reports": {"id": "a"}}))

        with pytest.raises(ReportFormatError):
            read_reports(path)

    def test_read_users(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text(json.dumps([
            {"id": 1, "name": "Taro", "role": "editor"},
            {"id": 2, "name": "Hanako", "role": "editor"},
        ]))

        users = read_users(path)

        assert staff_name_map(users) == {"1": "Taro", "2": "Hanako"}


class TestDataStatus:

    def test_prefers_parquet_then_csv(self, tmp_path):
        (tmp_path / "users.csv").write_text("staff_id,name\n1,Taro\n")
        (tmp_path / "users.json").write_text("[]")

        assert resolve_data_file(tmp_path / "users") == tmp_path / "users.csv"

    def test_status(self, tmp_path):
        processed = tmp_path / "processed"
        processed.mkdir()
        (processed / "users.csv").write_text("staff_id,name\n1,Taro\n")

        status = get_data_status(tmp_path)

        assert status["users"]["exists"] is True
        assert status["users"]["format"] == "csv"
        assert status["task_reports"]["exists"] is False
