from app.models.course import Course
from app.models.enums import SubmissionState, TaskPriority, TaskStatus, TaskType
from app.models.program import Program
from app.models.task import Task

__all__ = [
    "Course",
    "Program",
    "SubmissionState",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "TaskType",
]
