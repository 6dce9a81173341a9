"""JSON adapter for tasks and goals."""

from __future__ import annotations

import json
import logging
import math

from pacing_engine.constants import DEFAULT_PLAN_START_HOUR, DEFAULT_TASK_DURATION, TASK_TYPES
from pacing_engine.schema import Goal, Task
from pacing_engine.timeutil import parse_date_key

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "y"}
_FALSE_VALUES = {"", "0", "false", "no", "n"}


def _pick(item: dict, *names: str):
    for name in names:
        if item.get(name) is not None:
            return item[name]
    return None


def _parse_number(raw, field: str, index: int) -> float:
    if isinstance(raw, bool):
        raise ValueError(f"Item {index}: invalid {field}")
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Item {index}: invalid {field}") from exc
    if not math.isfinite(value):
        raise ValueError(f"Item {index}: invalid {field}")
    return value


def _parse_bool(raw, field: str, index: int) -> bool:
    if raw is None:
        return False
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"Item {index}: invalid {field} '{raw}'")


def _parse_date(raw, field: str, index: int) -> str:
    try:
        return parse_date_key(str(raw)).isoformat()
    except ValueError as exc:
        raise ValueError(f"Item {index}: malformed {field}") from exc


def _parse_task_item(item: dict, index: int) -> Task:
    if not isinstance(item, dict):
        raise ValueError(f"Item {index}: expected an object")
    missing = [field for field in ("id", "date") if _pick(item, field) is None]
    if missing:
        raise ValueError(f"Item {index}: missing required fields {missing}")

    start_raw = _pick(item, "start_minutes", "startMinutes")
    if start_raw is not None:
        start_minutes = int(_parse_number(start_raw, "start_minutes", index))
    elif _pick(item, "start_hour", "startHour") is not None:
        legacy = _pick(item, "start_hour", "startHour")
        logger.debug("Item %s: converting legacy start_hour %s", index, legacy)
        start_minutes = int(_parse_number(legacy, "start_hour", index) * 60)
    else:
        start_minutes = DEFAULT_PLAN_START_HOUR * 60

    duration_raw = _pick(item, "duration")
    duration = DEFAULT_TASK_DURATION if duration_raw is None else int(_parse_number(duration_raw, "duration", index))

    task_type = str(_pick(item, "type") or "study").strip()
    if task_type not in TASK_TYPES:
        raise ValueError(f"Item {index}: invalid type '{task_type}'")

    book_raw = _pick(item, "book_id", "bookId")

    return Task(
        id=int(_parse_number(item["id"], "id", index)),
        date=_parse_date(item["date"], "date", index),
        start_minutes=start_minutes,
        duration=duration,
        type=task_type,
        is_completed=_parse_bool(_pick(item, "is_completed", "isCompleted"), "is_completed", index),
        title=str(item.get("title") or ""),
        color=str(item.get("color") or ""),
        book_id=int(_parse_number(book_raw, "book_id", index)) if book_raw is not None else None,
    )


def _parse_goal_item(item: dict, index: int) -> Goal:
    if not isinstance(item, dict):
        raise ValueError(f"Item {index}: expected an object")
    fields = {
        "id": _pick(item, "id"),
        "exam_date": _pick(item, "exam_date", "examDate"),
        "target_hours": _pick(item, "target_hours", "targetHours"),
    }
    missing = [name for name, value in fields.items() if value is None]
    if missing:
        raise ValueError(f"Item {index}: missing required fields {missing}")

    return Goal(
        id=int(_parse_number(fields["id"], "id", index)),
        title=str(item.get("title") or ""),
        exam_date=_parse_date(fields["exam_date"], "exam_date", index),
        target_hours=_parse_number(fields["target_hours"], "target_hours", index),
        weekday_hours_target=_parse_number(
            _pick(item, "weekday_hours_target", "weekdayHoursTarget") or 0, "weekday_hours_target", index
        ),
        weekend_hours_target=_parse_number(
            _pick(item, "weekend_hours_target", "weekendHoursTarget") or 0, "weekend_hours_target", index
        ),
        is_active=_parse_bool(_pick(item, "is_active", "isActive"), "is_active", index),
    )


def _load_list(file_path: str) -> list:
    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")
    return payload


def parse_tasks(file_path: str) -> list[Task]:
    """Parse JSON file into tasks."""

    return [_parse_task_item(item, i) for i, item in enumerate(_load_list(file_path), start=1)]


def parse_goals(file_path: str) -> list[Goal]:
    """Parse JSON file into goals."""

    return [_parse_goal_item(item, i) for i, item in enumerate(_load_list(file_path), start=1)]
