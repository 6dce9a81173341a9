"""Calendar and minute-of-day helpers."""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta
from typing import Any, Union

from pacing_engine.constants import DEFAULT_PLAN_START_HOUR, MINUTES_PER_DAY, WEEKDAY_LABELS
from pacing_engine.schema import DayDescriptor

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]


def coerce_number(value: Any, default: float) -> float:
    """Return ``value`` as a finite number, or ``default`` when it is not one."""

    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return default
    if isinstance(number, float):
        if not math.isfinite(number):
            return default
        if number.is_integer():
            return int(number)
    return number


def task_start_minutes(task: Any) -> float:
    """Start offset in minutes, falling back to the plan's opening time."""

    raw = getattr(task, "start_minutes", None)
    value = coerce_number(raw, math.nan)
    if isinstance(value, float) and math.isnan(value):
        logger.debug("Task %s has no usable start_minutes (%r)", getattr(task, "id", None), raw)
        return DEFAULT_PLAN_START_HOUR * 60
    return value


def task_duration(task: Any) -> float:
    """Duration in minutes; missing or non-numeric durations count as 0."""

    return coerce_number(getattr(task, "duration", None), 0)


def task_start_hour(task: Any) -> int:
    return int(task_start_minutes(task) // 60)


def minutes_to_time_string(minutes: Any) -> str:
    """Format minutes since midnight as ``HH:MM``, wrapping into one day.

    Negative and out-of-range values wrap with floor-modulo, so ``-30``
    becomes ``"23:30"``.
    """

    safe = math.floor(coerce_number(minutes, 0)) % MINUTES_PER_DAY
    return f"{safe // 60:02d}:{safe % 60:02d}"


def add_days(base: DateLike, offset_days: int) -> DateLike:
    return base + timedelta(days=offset_days)


def date_key(value: DateLike) -> str:
    """``YYYY-MM-DD`` for the local calendar day of ``value``."""

    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_date_key(text: str) -> date:
    """Parse a ``YYYY-MM-DD`` key into a ``date``."""

    try:
        return date.fromisoformat(str(text).strip()[:10])
    except ValueError as exc:
        raise ValueError(f"Invalid date key '{text}'") from exc


def week_start_monday(value: DateLike) -> DateLike:
    """Monday at or before ``value`` with the time of day zeroed."""

    if isinstance(value, datetime):
        value = value.replace(hour=0, minute=0, second=0, microsecond=0)
    return value - timedelta(days=value.weekday())


def week_days(week_start: DateLike) -> list[DayDescriptor]:
    """Describe the 7 calendar days starting at ``week_start``."""

    days = []
    for index in range(7):
        current = add_days(week_start, index)
        days.append(
            DayDescriptor(
                key=date_key(current),
                day=WEEKDAY_LABELS[current.weekday()],
                date=str(current.day),
                month=current.month,
                year=current.year,
            )
        )
    return days
