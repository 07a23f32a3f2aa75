import math
from dataclasses import dataclass, field
from typing import Dict, Iterable

from app.core.config import DUE_SOON_DAYS
from app.models.enums import TaskStatus
from app.services.due_dates import DateLike, as_day, days_until


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percent(part: int, whole: int) -> int:
    if whole == 0:
        return 0
    return round_half_up(part / whole * 100)


def is_completed(task) -> bool:
    return task.status == TaskStatus.COMPLETED


@dataclass
class CourseProgress:
    course_id: int
    total: int = 0
    completed: int = 0

    @property
    def completion_percent(self) -> int:
        return percent(self.completed, self.total)


@dataclass
class TaskStats:
    total: int = 0
    overdue_count: int = 0
    due_soon_count: int = 0
    completed_count: int = 0
    courses: Dict[int, CourseProgress] = field(default_factory=dict)

    @property
    def completion_rate(self) -> int:
        return percent(self.completed_count, self.total)


def compute_stats(tasks: Iterable, today: DateLike, due_soon_days: int = DUE_SOON_DAYS) -> TaskStats:
    """
    Aggregate dashboard counters over any iterable of task-like objects.

    Each item needs ``due_date``, ``status`` and ``course_id`` attributes.
    The iterable is consumed once, so a streaming query result works as well
    as a list.

    - overdue: due day before today, not completed
    - due soon: due within [0, due_soon_days] days, not completed
    - tasks without a due date only count towards totals and completion
    """
    today = as_day(today)
    stats = TaskStats()

    for task in tasks:
        done = is_completed(task)
        stats.total += 1
        if done:
            stats.completed_count += 1

        progress = stats.courses.get(task.course_id)
        if progress is None:
            progress = stats.courses[task.course_id] = CourseProgress(course_id=task.course_id)
        progress.total += 1
        if done:
            progress.completed += 1

        diff = days_until(task.due_date, today)
        if diff is None or done:
            continue
        if diff < 0:
            stats.overdue_count += 1
        elif diff <= due_soon_days:
            stats.due_soon_count += 1

    return stats
