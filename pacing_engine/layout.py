"""Column layout for overlapping tasks on a day timeline."""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Union

from pacing_engine.constants import Z_INDEX_BASE
from pacing_engine.schema import Task, TaskLayout
from pacing_engine.timeutil import date_key, task_duration, task_start_minutes


def task_end_minutes(task: Any) -> float:
    """End of the task's ``[start, start + duration)`` interval.

    Non-positive durations collapse to the empty interval ``[start, start)``.
    """

    start = task_start_minutes(task)
    return start + max(0, task_duration(task))


def sort_tasks(tasks: Iterable[Any]) -> list:
    """Order by start, longer tasks first on equal starts, then by id."""

    return sorted(tasks, key=lambda task: (task_start_minutes(task), -task_duration(task), task.id))


def tasks_for_day(tasks: Iterable[Task], day: Union[str, date]) -> list[Task]:
    key = day if isinstance(day, str) else date_key(day)
    return [task for task in tasks if task.date == key]


def cluster_tasks(tasks: Iterable[Any]) -> list[list]:
    """Split tasks into maximal runs of transitively overlapping tasks.

    A task opens a new cluster when it starts at or after the end of every
    task already in the current one.
    """

    clusters: list[list] = []
    current: list = []
    cluster_end = 0.0
    for task in sort_tasks(tasks):
        start = task_start_minutes(task)
        end = task_end_minutes(task)
        if current and start < cluster_end:
            current.append(task)
            cluster_end = max(cluster_end, end)
            continue
        if current:
            clusters.append(current)
        current = [task]
        cluster_end = end
    if current:
        clusters.append(current)
    return clusters


def assign_columns(cluster: list) -> list[int]:
    """First-fit column index for each task of an already-sorted cluster."""

    columns: list[Any] = []
    indexes: list[int] = []
    for task in cluster:
        start = task_start_minutes(task)
        placed = -1
        for i, last in enumerate(columns):
            if task_end_minutes(last) <= start:
                placed = i
                break
        if placed < 0:
            columns.append(task)
            placed = len(columns) - 1
        else:
            columns[placed] = task
        indexes.append(placed)
    return indexes


def max_concurrency(cluster: Iterable[Any]) -> int:
    """Largest number of tasks active at the same instant."""

    spans = [(task_start_minutes(task), task_end_minutes(task)) for task in cluster]
    peak = 0
    for point, end in spans:
        active = sum(1 for s, e in spans if s <= point < e)
        # an empty interval is not counted by the containment test above
        if end <= point:
            active += 1
        peak = max(peak, active)
    return peak


def calculate_task_layout(tasks: Iterable[Any]) -> dict[int, TaskLayout]:
    """Map each task id to its column geometry.

    Tasks are expected to belong to one calendar day; no date filtering
    happens here. Clusters are laid out independently, so the column count
    of one cluster never affects the width of tasks in another.
    """

    layout: dict[int, TaskLayout] = {}
    for cluster_index, cluster in enumerate(cluster_tasks(tasks)):
        indexes = assign_columns(cluster)
        column_count = max(indexes) + 1
        for task, column_index in zip(cluster, indexes):
            layout[task.id] = TaskLayout(
                column_index=column_index,
                column_count=column_count,
                cluster_index=cluster_index,
                z_index=column_index + Z_INDEX_BASE,
            )
    return layout
