"""
Tests for the allocation simulator command line script.
"""
import json
import pytest
import runpy
import sys
from pathlib import Path

import pandas as pd

SCRIPT = Path(__file__).parent.parent / "scripts" / "run_simulation.py"


@pytest.fixture
def script_main():
    return runpy.run_path(str(SCRIPT), run_name="run_simulation")["main"]


def run_with_args(main, monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["run_simulation.py", *args])
    main()


class TestRunSimulationScript:
    """Bad input data exits cleanly with an error message."""

    def test_sample_roster(self, script_main, monkeypatch, capsys):
        run_with_args(script_main, monkeypatch, "--target", "100")

        out = capsys.readouterr().out
        assert "Scenario: balanced" in out
        assert "ERROR:" not in out

    def test_missing_columns_exit_with_error(self, script_main, monkeypatch, capsys, tmp_path):
        processed = tmp_path / "processed"
        processed.mkdir()
        pd.DataFrame({"report_id": ["r1"], "staff_id": ["u1"]}).to_csv(
            processed / "task_reports.csv", index=False
        )

        with pytest.raises(SystemExit) as exc:
            run_with_args(
                script_main, monkeypatch,
                "--target", "10", "--from-reports", "--data-dir", str(tmp_path),
            )

        assert exc.value.code == 1
        assert "ERROR:" in capsys.readouterr().out

    def test_bad_duration_exit_with_error(self, script_main, monkeypatch, capsys, tmp_path):
        processed = tmp_path / "processed"
        processed.mkdir()
        reports = [{
            "id": "r1",
            "userId": "u1",
            "date": "2024-01-10",
            "tasks": [{"taskType": "create", "durationHrs": "two hours"}],
        }]
        (processed / "task_reports.json").write_text(json.dumps(reports), encoding="utf-8")

        with pytest.raises(SystemExit) as exc:
            run_with_args(
                script_main, monkeypatch,
                "--target", "10", "--from-reports", "--data-dir", str(tmp_path),
            )

        assert exc.value.code == 1
        assert "Invalid duration" in capsys.readouterr().out
