"""Combined day timeline and goal pacing report."""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date
from typing import Optional

from pacing_engine.layout import calculate_task_layout, sort_tasks, task_end_minutes, tasks_for_day
from pacing_engine.metrics import study_history
from pacing_engine.pacing import compute_pacing, cumulative_study_hours, pacing_message
from pacing_engine.schema import Goal, Task, select_active_goal
from pacing_engine.timeutil import (
    date_key,
    minutes_to_time_string,
    task_start_minutes,
    week_days,
    week_start_monday,
)

logger = logging.getLogger(__name__)


def timeline_rows(tasks: list[Task], day: date) -> list[dict]:
    """Laid-out tasks of ``day`` in render order."""

    day_tasks = tasks_for_day(tasks, day)
    layout = calculate_task_layout(day_tasks)
    rows = []
    for task in sort_tasks(day_tasks):
        geometry = layout[task.id]
        rows.append(
            {
                "id": task.id,
                "title": task.title,
                "type": task.type,
                "start": minutes_to_time_string(task_start_minutes(task)),
                "end": minutes_to_time_string(task_end_minutes(task)),
                "start_minutes": task_start_minutes(task),
                "end_minutes": task_end_minutes(task),
                "column_index": geometry.column_index,
                "column_count": geometry.column_count,
                "cluster_index": geometry.cluster_index,
                "left": geometry.left_css,
                "width": geometry.width_css,
                "z_index": geometry.z_index,
            }
        )
    return rows


def pacing_section(goals: list[Goal], tasks: list[Task], today: date) -> Optional[dict]:
    goal = select_active_goal(goals)
    if goal is None:
        logger.info("No active goal; skipping pacing")
        return None
    summary = compute_pacing(goal, cumulative_study_hours(tasks), today)
    payload = asdict(summary)
    payload["goal_title"] = goal.title
    payload["remaining_hours"] = summary.remaining_hours
    payload["message"] = pacing_message(summary)
    return payload


def build_plan_report(tasks: list[Task], goals: list[Goal], day: date, today: date) -> dict:
    """Build a JSON-friendly report for the selected day and active goal."""

    history = study_history(tasks, today)
    return {
        "day": date_key(day),
        "week": [asdict(descriptor) for descriptor in week_days(week_start_monday(day))],
        "timeline": timeline_rows(tasks, day),
        "pacing": pacing_section(goals, tasks, today),
        "history": {
            "total_hours": history["total_hours"],
            "current_streak": history["current_streak"],
            "peak_hour": history["peak_hour"],
            "insight": history["insight"],
        },
    }
