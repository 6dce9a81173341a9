"""CSV adapter for tasks and goals."""

from __future__ import annotations

import csv
import logging
import math

from pacing_engine.constants import DEFAULT_PLAN_START_HOUR, DEFAULT_TASK_DURATION, TASK_TYPES
from pacing_engine.schema import Goal, Task
from pacing_engine.timeutil import parse_date_key

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "y"}
_FALSE_VALUES = {"", "0", "false", "no", "n"}


def _pick(row: dict, *names: str) -> str | None:
    for name in names:
        value = row.get(name)
        if value is not None and value.strip() != "":
            return value.strip()
    return None


def _parse_bool(raw: str | None, field: str, row_number: int) -> bool:
    text = (raw or "").strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"Row {row_number}: invalid {field} '{raw}'")


def _parse_number(raw: str, field: str, row_number: int) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"Row {row_number}: invalid {field}") from exc
    if not math.isfinite(value):
        raise ValueError(f"Row {row_number}: invalid {field}")
    return value


def _parse_date(raw: str | None, field: str, row_number: int) -> str:
    if raw is None:
        raise ValueError(f"Row {row_number}: missing required fields ['{field}']")
    try:
        return parse_date_key(raw).isoformat()
    except ValueError as exc:
        raise ValueError(f"Row {row_number}: malformed {field}") from exc


def _parse_start_minutes(row: dict, row_number: int) -> int:
    raw = _pick(row, "start_minutes", "startMinutes")
    if raw is not None:
        return int(_parse_number(raw, "start_minutes", row_number))
    legacy = _pick(row, "start_hour", "startHour")
    if legacy is not None:
        logger.debug("Row %s: converting legacy start_hour %s", row_number, legacy)
        return int(_parse_number(legacy, "start_hour", row_number) * 60)
    return DEFAULT_PLAN_START_HOUR * 60


def _parse_task_row(row: dict, row_number: int) -> Task:
    task_id = _pick(row, "id")
    if task_id is None:
        raise ValueError(f"Row {row_number}: missing required fields ['id']")
    try:
        task_id_value = int(task_id)
    except ValueError as exc:
        raise ValueError(f"Row {row_number}: invalid id '{task_id}'") from exc

    task_date = _parse_date(_pick(row, "date"), "date", row_number)

    duration_raw = _pick(row, "duration")
    duration = DEFAULT_TASK_DURATION if duration_raw is None else int(_parse_number(duration_raw, "duration", row_number))

    task_type = _pick(row, "type") or "study"
    if task_type not in TASK_TYPES:
        raise ValueError(f"Row {row_number}: invalid type '{task_type}'")

    book_raw = _pick(row, "book_id", "bookId")
    book_id = int(_parse_number(book_raw, "book_id", row_number)) if book_raw is not None else None

    return Task(
        id=task_id_value,
        date=task_date,
        start_minutes=_parse_start_minutes(row, row_number),
        duration=duration,
        type=task_type,
        is_completed=_parse_bool(_pick(row, "is_completed", "isCompleted"), "is_completed", row_number),
        title=_pick(row, "title") or "",
        color=_pick(row, "color") or "",
        book_id=book_id,
    )


def _parse_goal_row(row: dict, row_number: int) -> Goal:
    fields = {
        "id": _pick(row, "id"),
        "exam_date": _pick(row, "exam_date", "examDate"),
        "target_hours": _pick(row, "target_hours", "targetHours"),
    }
    missing = [name for name, value in fields.items() if value is None]
    if missing:
        raise ValueError(f"Row {row_number}: missing required fields {missing}")

    weekday_raw = _pick(row, "weekday_hours_target", "weekdayHoursTarget")
    weekend_raw = _pick(row, "weekend_hours_target", "weekendHoursTarget")
    return Goal(
        id=int(_parse_number(fields["id"], "id", row_number)),
        title=_pick(row, "title") or "",
        exam_date=_parse_date(fields["exam_date"], "exam_date", row_number),
        target_hours=_parse_number(fields["target_hours"], "target_hours", row_number),
        weekday_hours_target=_parse_number(weekday_raw, "weekday_hours_target", row_number) if weekday_raw else 0.0,
        weekend_hours_target=_parse_number(weekend_raw, "weekend_hours_target", row_number) if weekend_raw else 0.0,
        is_active=_parse_bool(_pick(row, "is_active", "isActive"), "is_active", row_number),
    )


def _read_rows(file_path: str) -> list[tuple[int, dict]]:
    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []
        return list(enumerate(reader, start=2))


def parse_tasks(file_path: str) -> list[Task]:
    """Parse a CSV file into tasks."""

    return [_parse_task_row(row, row_number) for row_number, row in _read_rows(file_path)]


def parse_goals(file_path: str) -> list[Goal]:
    """Parse a CSV file into goals."""

    return [_parse_goal_row(row, row_number) for row_number, row in _read_rows(file_path)]
