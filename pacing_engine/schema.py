"""Core data schema for tasks, goals and derived planning records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class Task:
    """Time-boxed task scheduled on a single calendar day."""

    id: int
    date: str
    start_minutes: int
    duration: int
    type: str = "study"
    is_completed: bool = False
    title: str = ""
    color: str = ""
    book_id: Optional[int] = None


@dataclass
class Goal:
    """Study goal: accumulate ``target_hours`` by ``exam_date``."""

    id: int
    title: str
    exam_date: str
    target_hours: float
    weekday_hours_target: float
    weekend_hours_target: float
    is_active: bool = False


@dataclass(frozen=True)
class DayDescriptor:
    key: str
    day: str
    date: str
    month: int
    year: int


@dataclass(frozen=True)
class TaskLayout:
    """Column geometry of one task within its overlap cluster."""

    column_index: int
    column_count: int
    cluster_index: int
    z_index: int

    @property
    def width(self) -> float:
        return 1.0 / self.column_count

    @property
    def left(self) -> float:
        return self.column_index * self.width

    @property
    def width_css(self) -> str:
        return f"{self.width * 100}%"

    @property
    def left_css(self) -> str:
        return f"{self.left * 100}%"


@dataclass(frozen=True)
class PacingSummary:
    """Pace required to reach a goal by its deadline."""

    days_left: int
    target_hours: float
    current_hours: float
    progress_percent: int
    required_weekday_hours: Optional[float]
    required_weekend_hours: Optional[float]
    required_hours_per_day: Optional[float]
    is_warning: bool
    remaining_weekdays: int = 0
    remaining_weekends: int = 0
    scale: Optional[float] = None

    @property
    def remaining_hours(self) -> float:
        return max(0.0, self.target_hours - self.current_hours)


def select_active_goal(goals: list[Goal]) -> Optional[Goal]:
    """Return the first goal flagged active, if any."""

    return next((goal for goal in goals if goal.is_active), None)
