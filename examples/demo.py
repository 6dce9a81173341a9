"""Demo script for pacing-engine."""

import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from pacing_engine.adapters import csv_adapter, json_adapter
from pacing_engine.report import build_plan_report


def main() -> None:
    tasks = csv_adapter.parse_tasks("examples/sample_tasks.csv")
    goals = json_adapter.parse_goals("examples/sample_goals.json")
    report = build_plan_report(tasks, goals, day=date(2025, 1, 6), today=date(2025, 1, 6))
    for row in report["timeline"]:
        print(f"{row['start']}-{row['end']} {row['title']}: left={row['left']} width={row['width']}")
    print("Pacing:", report["pacing"]["message"] if report["pacing"] else "no active goal")
    print("History:", report["history"])


if __name__ == "__main__":
    main()
