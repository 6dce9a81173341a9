"""Study history metrics."""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime
from typing import Iterable, Optional, Union

import numpy as np

from pacing_engine.constants import DAILY_MINUTES_CAP, HEATMAP_WEEKS, HISTORY_DAYS
from pacing_engine.schema import Task
from pacing_engine.timeutil import add_days, coerce_number, date_key, task_start_hour, week_start_monday


def daily_minutes(tasks: Iterable[Task], completed_only: bool = True) -> dict[str, float]:
    """Sum task minutes per date key."""

    by_date: dict[str, float] = defaultdict(float)
    for task in tasks:
        if not task.date:
            continue
        if completed_only and not task.is_completed:
            continue
        by_date[task.date] += coerce_number(task.duration, 0)
    return dict(by_date)


def heatmap_level(minutes: float) -> int:
    """Bucket a day's minutes into heatmap intensity levels 0-3."""

    if minutes <= 0:
        return 0
    if minutes <= 30:
        return 1
    if minutes <= 90:
        return 2
    return 3


def heatmap_cells(tasks: Iterable[Task], today: Union[date, datetime], weeks: int = HEATMAP_WEEKS) -> list[dict]:
    """Monday-aligned grid of completed minutes ending with the week of ``today``.

    Each cell carries its 1-based ``column`` (week) and ``row`` (weekday).
    """

    if isinstance(today, datetime):
        today = today.date()
    completed_by_date = daily_minutes(tasks)
    first_week = week_start_monday(add_days(today, -(weeks - 1) * 7))
    cells = []
    for week in range(weeks):
        for weekday in range(7):
            key = date_key(add_days(first_week, week * 7 + weekday))
            minutes = min(DAILY_MINUTES_CAP, completed_by_date.get(key, 0))
            cells.append(
                {
                    "date_key": key,
                    "minutes": minutes,
                    "level": heatmap_level(minutes),
                    "column": week + 1,
                    "row": weekday + 1,
                }
            )
    return cells


def peak_hour_insight(peak_hour: Optional[int]) -> str:
    if peak_hour is None:
        return "No study records yet. Complete your first task!"
    if peak_hour <= 5:
        return "Early riser: you make the most of the early morning."
    if peak_hour <= 11:
        return "Morning starter: you get going quickly before noon."
    if peak_hour <= 17:
        return "Steady daytime learner: you build up progress through the day."
    return "Night owl: the quiet evening hours are your strength."


def study_history(
    tasks: Iterable[Task],
    today: Union[date, datetime],
    total_days: int = HISTORY_DAYS,
) -> dict:
    """Compute daily records, totals, streak and hourly distribution."""

    tasks = list(tasks)
    if isinstance(today, datetime):
        today = today.date()

    completed_by_date = daily_minutes(tasks)
    start = add_days(today, -(total_days - 1))
    daily_records = []
    for offset in range(total_days):
        key = date_key(add_days(start, offset))
        minutes = min(DAILY_MINUTES_CAP, completed_by_date.get(key, 0))
        daily_records.append({"date_key": key, "minutes": minutes})

    total_minutes = sum(
        coerce_number(task.duration, 0) for task in tasks if task.is_completed and task.type == "study"
    )

    current_streak = 0
    for record in reversed(daily_records):
        if record["minutes"] <= 0:
            break
        current_streak += 1

    completed = [task for task in tasks if task.is_completed]
    hours = [max(0, min(23, task_start_hour(task))) for task in completed]
    weights = [coerce_number(task.duration, 0) for task in completed]
    hourly = np.bincount(hours, weights=weights, minlength=24) if hours else np.zeros(24)
    peak_hour = int(np.argmax(hourly)) if completed else None

    return {
        "daily_records": daily_records,
        "total_minutes": total_minutes,
        "total_hours": round(total_minutes / 60, 1),
        "current_streak": current_streak,
        "hourly_minutes": [float(value) for value in hourly],
        "peak_hour": peak_hour,
        "insight": peak_hour_insight(peak_hour),
    }
