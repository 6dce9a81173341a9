"""Pacing projection toward an active study goal."""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta
from typing import Iterable, Union

import numpy as np

from pacing_engine.constants import WARNING_SCALE
from pacing_engine.schema import Goal, PacingSummary, Task
from pacing_engine.timeutil import coerce_number, parse_date_key

logger = logging.getLogger(__name__)


def _as_date(value: Union[str, date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date_key(value)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def cumulative_study_hours(tasks: Iterable[Task]) -> float:
    """Completed study time in hours, rounded to one decimal."""

    total_minutes = sum(
        coerce_number(task.duration, 0) for task in tasks if task.type == "study" and task.is_completed
    )
    return _round_half_up(total_minutes / 6) / 10


def days_until(exam_date: Union[str, date, datetime], today: Union[str, date, datetime]) -> int:
    """Whole calendar days from today to the exam, never negative."""

    return max(0, (_as_date(exam_date) - _as_date(today)).days)


def count_remaining_days(today: Union[str, date, datetime], days_left: int) -> tuple[int, int]:
    """Count (weekdays, weekend days) among ``days_left`` days starting today."""

    if days_left <= 0:
        return 0, 0
    start = _as_date(today)
    end = start + timedelta(days=days_left)
    weekdays = int(np.busday_count(np.datetime64(start, "D"), np.datetime64(end, "D")))
    return weekdays, days_left - weekdays


def compute_pacing(goal: Goal, current_hours: float, today: Union[str, date, datetime]) -> PacingSummary:
    """Project the daily effort needed to reach ``goal`` by its exam date.

    The user's weekday/weekend targets are scaled by one common factor so
    that following them exactly closes the remaining gap. A factor above
    ``WARNING_SCALE`` flags the plan as behind. When both targets are zero
    the remaining hours are split evenly over the days left instead.
    """

    target_hours = float(goal.target_hours)
    days_left = days_until(goal.exam_date, today)
    remaining_hours = max(0.0, target_hours - current_hours)

    if target_hours > 0:
        progress_percent = min(100, _round_half_up(current_hours / target_hours * 100))
    else:
        progress_percent = 0

    required_weekday = None
    required_weekend = None
    required_per_day = None
    scale = None
    is_warning = False
    weekdays, weekends = count_remaining_days(today, days_left)

    if days_left > 0:
        weighted_days = weekdays * goal.weekday_hours_target + weekends * goal.weekend_hours_target
        if weighted_days > 0:
            scale = remaining_hours / weighted_days
            required_weekday = goal.weekday_hours_target * scale
            required_weekend = goal.weekend_hours_target * scale
            is_warning = scale > WARNING_SCALE
        else:
            required_per_day = math.ceil(remaining_hours / days_left * 10) / 10
            required_weekday = required_per_day
            required_weekend = required_per_day
    elif remaining_hours > 0:
        is_warning = True

    logger.debug(
        "Goal %s: days_left=%s remaining=%.2fh scale=%s warning=%s",
        goal.id,
        days_left,
        remaining_hours,
        scale,
        is_warning,
    )

    return PacingSummary(
        days_left=days_left,
        target_hours=target_hours,
        current_hours=current_hours,
        progress_percent=progress_percent,
        required_weekday_hours=required_weekday,
        required_weekend_hours=required_weekend,
        required_hours_per_day=required_per_day,
        is_warning=is_warning,
        remaining_weekdays=weekdays,
        remaining_weekends=weekends,
        scale=scale,
    )


def pacing_message(summary: PacingSummary) -> str:
    """Dashboard line describing the pace the summary calls for."""

    if summary.days_left <= 0:
        if summary.is_warning:
            return "Behind schedule: the exam date is today or has passed"
        return "On track to reach the goal"
    if summary.required_hours_per_day is not None:
        return f"Need {summary.required_hours_per_day:.1f}h per day from today"
    weekday = f"{summary.required_weekday_hours:.1f}"
    weekend = f"{summary.required_weekend_hours:.1f}"
    if summary.is_warning:
        return f"Behind schedule: weekdays {weekday}h / weekends {weekend}h needed"
    return f"Weekdays need {weekday}h/day, weekends need {weekend}h/day"
