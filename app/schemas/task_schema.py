from datetime import date
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from app.models.enums import SubmissionState, TaskPriority, TaskStatus, TaskType
from app.services.due_dates import DueInfo, classify_due
from app.services.queries import TaskListing


class TaskRequest(BaseModel):
    """
    Body of POST / PUT / PATCH on tasks.

    PUT replaces the whole record, so every optional field left out is nulled.
    PATCH only applies the fields that are present in the body.
    """

    course_id: Optional[int] = None
    title: Optional[str] = None
    type: Optional[TaskType] = None
    due_date: Optional[date] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    weight: Optional[float] = None
    # "submission_link" is what older front ends sent ("Yes" / "No")
    submission: Optional[SubmissionState] = Field(
        default=None,
        validation_alias=AliasChoices("submission", "submission_link"),
    )
    notes: Optional[str] = None

    @field_validator("due_date", "priority", "weight", mode="before")
    @classmethod
    def blank_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("submission", mode="before")
    @classmethod
    def parse_submission(cls, value):
        if value is None:
            return None
        return SubmissionState.parse(value)


class DueResponse(BaseModel):
    category: str
    label: Optional[str] = None
    days: Optional[int] = None

    @classmethod
    def from_info(cls, info: DueInfo) -> "DueResponse":
        return cls(category=info.category.value, label=info.label, days=info.days)


class TaskResponse(BaseModel):
    id: int
    course_id: int
    title: str
    type: str
    due_date: Optional[date] = None
    status: str
    priority: Optional[str] = None
    weight: Optional[float] = None
    submission: str
    notes: Optional[str] = None

    course_code: Optional[str] = None
    course_name: Optional[str] = None
    program_id: Optional[int] = None
    program_name: Optional[str] = None

    due: DueResponse

    class Config:
        from_attributes = True

    @classmethod
    def from_listing(cls, listing: TaskListing, today: date) -> "TaskResponse":
        task = listing.task
        return cls(
            id=task.id,
            course_id=task.course_id,
            title=task.title,
            type=task.type,
            due_date=task.due_date,
            status=task.status,
            priority=task.priority,
            weight=task.weight,
            submission=task.submission,
            notes=task.notes,
            course_code=listing.course_code,
            course_name=listing.course_name,
            program_id=listing.program_id,
            program_name=listing.program_name,
            due=DueResponse.from_info(classify_due(task.due_date, today)),
        )
