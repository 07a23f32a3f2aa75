from datetime import date
from types import SimpleNamespace

from app.models.enums import TaskStatus
from app.services.stats import compute_stats, percent, round_half_up

TODAY = date(2025, 6, 10)


def task(due_date, status="Not Completed", course_id=1):
    return SimpleNamespace(due_date=due_date, status=status, course_id=course_id)


def test_empty_collection():
    stats = compute_stats([], TODAY)

    assert stats.total == 0
    assert stats.overdue_count == 0
    assert stats.due_soon_count == 0
    assert stats.completion_rate == 0
    assert stats.courses == {}


def test_completion_rate_rounds():
    tasks = [
        task(date(2025, 6, 1), "Completed"),
        task(date(2025, 6, 2)),
        task(date(2025, 6, 3)),
    ]
    assert compute_stats(tasks, TODAY).completion_rate == 33

    tasks[1].status = "Completed"
    assert compute_stats(tasks, TODAY).completion_rate == 67


def test_round_half_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(2.5) == 3
    assert round_half_up(33.33) == 33
    assert percent(1, 8) == 13
    assert percent(5, 0) == 0


def test_overdue_task_in_progress():
    stats = compute_stats([task(date(2025, 6, 9), "In progress")], TODAY)

    assert stats.overdue_count == 1
    assert stats.due_soon_count == 0


def test_due_soon_window_is_inclusive():
    tasks = [
        task(date(2025, 6, 10)),
        task(date(2025, 6, 17)),
        task(date(2025, 6, 18)),
    ]
    stats = compute_stats(tasks, TODAY)

    assert stats.due_soon_count == 2
    assert stats.overdue_count == 0


def test_completed_tasks_are_never_late():
    tasks = [
        task(date(2025, 6, 1), TaskStatus.COMPLETED),
        task(date(2025, 6, 12), TaskStatus.COMPLETED),
    ]
    stats = compute_stats(tasks, TODAY)

    assert stats.overdue_count == 0
    assert stats.due_soon_count == 0
    assert stats.completed_count == 2
    assert stats.completion_rate == 100


def test_undated_tasks_only_count_towards_totals():
    stats = compute_stats([task(None), task(None, "Completed")], TODAY)

    assert stats.total == 2
    assert stats.overdue_count == 0
    assert stats.due_soon_count == 0
    assert stats.completion_rate == 50


def test_per_course_progress():
    tasks = [
        task(date(2025, 6, 1), "Completed", course_id=1),
        task(date(2025, 6, 2), course_id=1),
        task(date(2025, 6, 3), course_id=1),
        task(date(2025, 6, 4), "Completed", course_id=2),
    ]
    courses = compute_stats(tasks, TODAY).courses

    assert (courses[1].total, courses[1].completed, courses[1].completion_percent) == (3, 1, 33)
    assert (courses[2].total, courses[2].completed, courses[2].completion_percent) == (1, 1, 100)


def test_accepts_a_generator():
    stats = compute_stats((task(date(2025, 6, 9)) for _ in range(3)), TODAY)
    assert stats.overdue_count == 3


def test_custom_window():
    stats = compute_stats([task(date(2025, 6, 13))], TODAY, due_soon_days=2)
    assert stats.due_soon_count == 0
