from typing import List

from pydantic import BaseModel

from app.services.stats import TaskStats


class CourseProgressResponse(BaseModel):
    course_id: int
    total: int
    completed: int
    completion_percent: int


class TaskStatsResponse(BaseModel):
    total: int
    overdue_count: int
    due_soon_count: int
    completed_count: int
    completion_rate: int
    courses: List[CourseProgressResponse]

    @classmethod
    def from_stats(cls, stats: TaskStats) -> "TaskStatsResponse":
        return cls(
            total=stats.total,
            overdue_count=stats.overdue_count,
            due_soon_count=stats.due_soon_count,
            completed_count=stats.completed_count,
            completion_rate=stats.completion_rate,
            courses=[
                CourseProgressResponse(
                    course_id=progress.course_id,
                    total=progress.total,
                    completed=progress.completed,
                    completion_percent=progress.completion_percent,
                )
                for progress in sorted(stats.courses.values(), key=lambda p: p.course_id)
            ],
        )
