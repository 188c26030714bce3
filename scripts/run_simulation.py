#!/usr/bin/env python
"""
Run the allocation simulator from the command line.

Usage:
    python scripts/run_simulation.py --target 200
    python scripts/run_simulation.py --target 150 --scenario quality-focused
    python scripts/run_simulation.py --target 150 --from-reports --data-dir /path/to/data
"""
import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from worklog.config import config, setup_logging, DATA_FILES, SCENARIOS
from worklog.data.fixtures import sample_roster
from worklog.data.loader import read_reports, read_users, resolve_data_file, staff_name_map
from worklog.data.models import ReportFormatError
from worklog.data.schema import SchemaValidationError
from worklog.metrics.performance import build_roster
from worklog.modeling.allocation import AllocationError, simulate_task_allocation

logger = logging.getLogger("run_simulation")


def load_roster(data_dir: Path, from_reports: bool):
    if not from_reports:
        return sample_roster()

    processed_dir = data_dir / "processed"
    reports_path = resolve_data_file(processed_dir / DATA_FILES["task_reports"])
    if reports_path is None:
        print(f"ERROR: Could not find task_reports in {processed_dir}")
        sys.exit(1)

    users_path = resolve_data_file(processed_dir / DATA_FILES["users"])
    names = staff_name_map(read_users(users_path)) if users_path else {}

    return build_roster(read_reports(reports_path), names)


def main():
    parser = argparse.ArgumentParser(description="Simulate monthly task allocation")
    parser.add_argument("--target", type=int, required=True, help="Target task count for the month")
    parser.add_argument("--scenario", choices=SCENARIOS, default="balanced", help="Allocation scenario")
    parser.add_argument("--from-reports", action="store_true", help="Build the roster from report data")
    parser.add_argument("--data-dir", type=str, default=None, help="Override data directory")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    args = parser.parse_args()
    setup_logging("DEBUG" if args.verbose else None)

    data_dir = Path(args.data_dir) if args.data_dir else config.data_dir
    try:
        roster = load_roster(data_dir, args.from_reports)
        result = simulate_task_allocation(roster, args.target, args.scenario)
    except (ReportFormatError, SchemaValidationError, AllocationError) as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    print(f"Scenario: {result.scenario}")
    print(f"  Team utilisation:     {result.team_utilization:.0%}")
    print(f"  Estimated quality:    {result.estimated_quality:.2f}")
    print(f"  Estimated deliveries: {result.estimated_deliveries} (target {args.target})")
    print()

    for a in result.allocations:
        print(f"  {a.staff_name:<20} {a.recommended_tasks:>4} tasks  {a.recommended_hours:>6.1f}h  "
              f"load {a.projected_load:>4.0%}  confidence {a.confidence:.2f}")
        print(f"    {a.reasoning}")
    print()

    for risk in result.risks:
        print(f"  ⚠ {risk}")
    for rec in result.recommendations:
        print(f"  • {rec}")


if __name__ == "__main__":
    main()
