"""Print the day timeline layout and goal pacing report."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from pacing_engine.adapters import csv_adapter, json_adapter
from pacing_engine.report import build_plan_report
from pacing_engine.timeutil import parse_date_key


def _load(path: Path, kind: str):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        adapter = csv_adapter
    elif suffix == ".json":
        adapter = json_adapter
    else:
        raise ValueError("Unsupported input format, expected .csv or .json")
    return adapter.parse_tasks(str(path)) if kind == "tasks" else adapter.parse_goals(str(path))


def main() -> None:
    parser = argparse.ArgumentParser(description="Lay out a day's tasks and project goal pacing")
    parser.add_argument("--tasks", required=True, help="Path to CSV/JSON tasks file")
    parser.add_argument("--goals", help="Path to CSV/JSON goals file")
    parser.add_argument("--day", help="Day to lay out (YYYY-MM-DD), defaults to today")
    parser.add_argument("--today", help="Reference date for pacing (YYYY-MM-DD), defaults to today")
    parser.add_argument("--out", help="Also write the report to this path")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        today = parse_date_key(args.today) if args.today else date.today()
        day = parse_date_key(args.day) if args.day else today
        tasks = _load(Path(args.tasks), "tasks")
        goals = _load(Path(args.goals), "goals") if args.goals else []
    except ValueError as exc:
        print(f"Input error: {exc}", file=sys.stderr)
        sys.exit(2)

    report = build_plan_report(tasks, goals, day=day, today=today)
    print(json.dumps(report, indent=2))

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
        print(f"Saved plan report to {out_path}")


if __name__ == "__main__":
    main()
