from datetime import date

from pacing_engine.report import build_plan_report
from pacing_engine.schema import Goal, Task


def sample_tasks():
    return [
        Task(1, "2025-01-06", 540, 60, is_completed=True, title="A"),
        Task(2, "2025-01-06", 570, 60, is_completed=True, title="B"),
        Task(3, "2025-01-07", 600, 30, title="C"),
    ]


def test_build_plan_report_for_selected_day():
    goal = Goal(1, "TOEIC", "2025-02-05", 100, 1, 2, is_active=True)
    report = build_plan_report(sample_tasks(), [goal], day=date(2025, 1, 6), today=date(2025, 1, 6))

    assert report["day"] == "2025-01-06"
    assert report["week"][0]["key"] == "2025-01-06"
    assert [row["id"] for row in report["timeline"]] == [1, 2]
    assert report["timeline"][1]["start"] == "09:30"
    assert report["timeline"][1]["left"] == "50.0%"
    assert report["pacing"]["current_hours"] == 2.0
    assert report["pacing"]["is_warning"] is True
    assert report["pacing"]["goal_title"] == "TOEIC"
    assert report["history"]["current_streak"] == 1


def test_build_plan_report_without_active_goal():
    goal = Goal(1, "TOEIC", "2025-02-05", 100, 1, 2, is_active=False)
    report = build_plan_report(sample_tasks(), [goal], day=date(2025, 1, 7), today=date(2025, 1, 7))
    assert report["pacing"] is None
    assert report["timeline"][0]["width"] == "100.0%"


def test_timeline_rows_keep_raw_minutes_past_midnight():
    tasks = [Task(1, "2025-01-06", 1380, 120, title="Late")]
    report = build_plan_report(tasks, [], day=date(2025, 1, 6), today=date(2025, 1, 6))
    row = report["timeline"][0]
    assert row["end"] == "01:00"
    assert row["start_minutes"] == 1380
    assert row["end_minutes"] == 1500
    assert report["history"]["insight"].startswith("No study records")


def test_pacing_section_reports_remaining_hours():
    goal = Goal(1, "TOEIC", "2025-02-05", 100, 1, 2, is_active=True)
    report = build_plan_report(sample_tasks(), [goal], day=date(2025, 1, 6), today=date(2025, 1, 6))
    assert report["pacing"]["remaining_hours"] == 98.0
