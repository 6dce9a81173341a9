from datetime import date

from pacing_engine.metrics import daily_minutes, heatmap_cells, heatmap_level, peak_hour_insight, study_history
from pacing_engine.schema import Task

TODAY = date(2025, 1, 10)


def sample_tasks():
    return [
        Task(1, "2025-01-08", 420, 60, is_completed=True),
        Task(2, "2025-01-09", 1260, 30, is_completed=True),
        Task(3, "2025-01-10", 1290, 300, is_completed=True),
        Task(4, "2025-01-10", 600, 45, is_completed=False),
        Task(5, "2025-01-10", 1275, 15, type="event", is_completed=True),
    ]


def test_daily_minutes_completed_only():
    assert daily_minutes(sample_tasks()) == {"2025-01-08": 60, "2025-01-09": 30, "2025-01-10": 315}
    assert daily_minutes(sample_tasks(), completed_only=False)["2025-01-10"] == 360


def test_study_history_streak_and_totals():
    history = study_history(sample_tasks(), TODAY, total_days=7)
    assert len(history["daily_records"]) == 7
    assert history["daily_records"][-1] == {"date_key": "2025-01-10", "minutes": 240}
    assert history["current_streak"] == 3
    assert history["total_minutes"] == 390
    assert history["total_hours"] == 6.5
    assert history["peak_hour"] == 21
    assert history["hourly_minutes"][7] == 60
    assert history["insight"].startswith("Night owl")


def test_study_history_without_completed_tasks():
    history = study_history([Task(1, "2025-01-10", 600, 45)], TODAY, total_days=3)
    assert history["current_streak"] == 0
    assert history["peak_hour"] is None
    assert sum(history["hourly_minutes"]) == 0


def test_heatmap_levels():
    assert [heatmap_level(m) for m in (0, 30, 31, 90, 91)] == [0, 1, 2, 2, 3]


def test_heatmap_cells_align_to_monday():
    cells = heatmap_cells(sample_tasks(), TODAY, weeks=2)
    assert len(cells) == 14
    assert cells[0]["date_key"] == "2024-12-30"
    assert cells[0]["row"] == 1
    friday = cells[11]
    assert friday == {"date_key": "2025-01-10", "minutes": 240, "level": 3, "column": 2, "row": 5}
    assert cells[-1]["date_key"] == "2025-01-12"


def test_heatmap_cells_default_spans_twenty_weeks():
    cells = heatmap_cells([], TODAY)
    assert len(cells) == 140
    assert cells[0]["date_key"] == "2024-08-26"
    assert cells[-1]["column"] == 20


def test_peak_hour_insight_buckets():
    assert peak_hour_insight(None).startswith("No study records")
    assert peak_hour_insight(5).startswith("Early riser")
    assert peak_hour_insight(9).startswith("Morning")
    assert peak_hour_insight(17).startswith("Steady")
    assert peak_hour_insight(18).startswith("Night owl")
