import json

import pytest

from pacing_engine.adapters.csv_adapter import parse_goals as parse_goals_csv
from pacing_engine.adapters.csv_adapter import parse_tasks as parse_tasks_csv
from pacing_engine.adapters.json_adapter import parse_goals as parse_goals_json
from pacing_engine.adapters.json_adapter import parse_tasks as parse_tasks_json
from pacing_engine.schema import select_active_goal


def test_csv_parse_tasks_success(tmp_path):
    path = tmp_path / "tasks.csv"
    path.write_text(
        "id,date,start_minutes,duration,type,is_completed,title\n"
        "1,2025-01-06,540,60,study,true,Vocabulary\n"
        "2,2025-01-06,,,event,false,Call\n",
        encoding="utf-8",
    )
    tasks = parse_tasks_csv(str(path))
    assert len(tasks) == 2
    assert tasks[0].is_completed is True
    assert tasks[1].start_minutes == 420
    assert tasks[1].duration == 60
    assert tasks[1].type == "event"


def test_csv_converts_legacy_start_hour(tmp_path):
    path = tmp_path / "tasks.csv"
    path.write_text("id,date,startHour,duration\n3,2025-01-06,9,30\n", encoding="utf-8")
    assert parse_tasks_csv(str(path))[0].start_minutes == 540


def test_csv_parse_invalid_row(tmp_path):
    path = tmp_path / "tasks.csv"
    path.write_text("id,date,start_minutes\n1,bad,540\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Row 2"):
        parse_tasks_csv(str(path))


def test_csv_parse_goals(tmp_path):
    path = tmp_path / "goals.csv"
    path.write_text(
        "id,title,exam_date,target_hours,weekday_hours_target,weekend_hours_target,is_active\n"
        "1,TOEIC,2025-02-05,100,1,2,false\n"
        "2,Boki,2025-06-15,150,1.5,3,true\n",
        encoding="utf-8",
    )
    goals = parse_goals_csv(str(path))
    assert select_active_goal(goals).id == 2
    assert goals[0].weekend_hours_target == 2.0


def test_json_parse_tasks_with_camel_case_fields(tmp_path):
    path = tmp_path / "tasks.json"
    payload = [
        {"id": 1, "date": "2025-01-06", "startMinutes": 600, "duration": 45, "isCompleted": True, "bookId": 3},
        {"id": 2, "date": "2025-01-06", "startHour": 13, "type": "event"},
    ]
    path.write_text(json.dumps(payload), encoding="utf-8")
    tasks = parse_tasks_json(str(path))
    assert tasks[0].start_minutes == 600
    assert tasks[0].book_id == 3
    assert tasks[1].start_minutes == 780
    assert tasks[1].duration == 60


def test_json_parse_malformed(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps([{"id": 1, "date": "2025-01-06", "duration": "long"}]), encoding="utf-8")
    with pytest.raises(ValueError):
        parse_tasks_json(str(path))


def test_json_payload_must_be_list(tmp_path):
    path = tmp_path / "goals.json"
    path.write_text(json.dumps({"id": 1}), encoding="utf-8")
    with pytest.raises(ValueError):
        parse_goals_json(str(path))


def test_json_goal_missing_fields(tmp_path):
    path = tmp_path / "goals.json"
    path.write_text(json.dumps([{"id": 1, "title": "No date"}]), encoding="utf-8")
    with pytest.raises(ValueError, match="exam_date"):
        parse_goals_json(str(path))


def test_no_active_goal():
    assert select_active_goal([]) is None


def test_csv_rejects_infinite_start(tmp_path):
    path = tmp_path / "tasks.csv"
    path.write_text("id,date,start_minutes,duration\n1,2025-01-06,inf,30\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Row 2: invalid start_minutes"):
        parse_tasks_csv(str(path))


def test_csv_rejects_nan_target_hours(tmp_path):
    path = tmp_path / "goals.csv"
    path.write_text("id,title,exam_date,target_hours\n1,TOEIC,2025-02-05,nan\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Row 2: invalid target_hours"):
        parse_goals_csv(str(path))


def test_json_rejects_nan_duration(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text('[{"id": 1, "date": "2025-01-06", "duration": NaN}]', encoding="utf-8")
    with pytest.raises(ValueError, match="Item 1: invalid duration"):
        parse_tasks_json(str(path))


def test_json_rejects_infinite_start(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text('[{"id": 1, "date": "2025-01-06", "startMinutes": Infinity}]', encoding="utf-8")
    with pytest.raises(ValueError, match="Item 1: invalid start_minutes"):
        parse_tasks_json(str(path))


def test_json_string_booleans_match_csv(tmp_path):
    path = tmp_path / "tasks.json"
    payload = [
        {"id": 1, "date": "2025-01-06", "isCompleted": "false"},
        {"id": 2, "date": "2025-01-06", "isCompleted": "true"},
        {"id": 3, "date": "2025-01-06", "isCompleted": 0},
    ]
    path.write_text(json.dumps(payload), encoding="utf-8")
    assert [task.is_completed for task in parse_tasks_json(str(path))] == [False, True, False]


def test_json_rejects_unknown_boolean(tmp_path):
    path = tmp_path / "goals.json"
    payload = [{"id": 1, "examDate": "2025-02-05", "targetHours": 100, "isActive": "maybe"}]
    path.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ValueError, match="Item 1: invalid is_active"):
        parse_goals_json(str(path))
