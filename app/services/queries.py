import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional

from sqlalchemy.orm import Session

from app.models import Course, Program, Task

logger = logging.getLogger(__name__)


@dataclass
class CourseListing:
    course: Course
    program_name: Optional[str]


@dataclass
class TaskListing:
    task: Task
    course_code: str
    course_name: str
    program_id: Optional[int]
    program_name: Optional[str]


def list_programs(db: Session) -> List[Program]:
    return db.query(Program).order_by(Program.name.asc(), Program.id.asc()).all()


def get_program(db: Session, program_id: int) -> Optional[Program]:
    return db.get(Program, program_id)


def _course_query(db: Session):
    return (
        db.query(Course, Program.name.label("program_name"))
        .outerjoin(Program, Course.program_id == Program.id)
    )


def list_courses(db: Session, program_id: Optional[int] = None) -> List[CourseListing]:
    query = _course_query(db)
    if program_id is not None:
        query = query.filter(Course.program_id == program_id)

    rows = query.order_by(Course.code.asc(), Course.id.asc()).all()
    logger.debug("list_courses program_id=%s rows=%s", program_id, len(rows))
    return [CourseListing(course, program_name) for course, program_name in rows]


def get_course(db: Session, course_id: int) -> Optional[CourseListing]:
    row = _course_query(db).filter(Course.id == course_id).first()
    if row is None:
        return None
    course, program_name = row
    return CourseListing(course, program_name)


def _filter_tasks(query, course_id=None, program_id=None, status=None):
    if course_id is not None:
        query = query.filter(Task.course_id == course_id)
    if program_id is not None:
        query = query.filter(Course.program_id == program_id)
    if status is not None:
        query = query.filter(Task.status == status)
    return query


def _task_order(query):
    # undated tasks sort after every dated one
    return query.order_by(Task.due_date.is_(None), Task.due_date.asc(), Task.id.asc())


def _task_listing_query(db: Session):
    return (
        db.query(
            Task,
            Course.code.label("course_code"),
            Course.name.label("course_name"),
            Program.id.label("program_id"),
            Program.name.label("program_name"),
        )
        .join(Course, Task.course_id == Course.id)
        .outerjoin(Program, Course.program_id == Program.id)
    )


def list_tasks(
    db: Session,
    course_id: Optional[int] = None,
    program_id: Optional[int] = None,
    status: Optional[str] = None,
) -> List[TaskListing]:
    """
    Tasks joined with their course and program, soonest due date first.

    Filters combine with AND. Tasks without a due date come last.
    """
    query = _filter_tasks(_task_listing_query(db), course_id, program_id, status)
    rows = _task_order(query).all()
    logger.debug(
        "list_tasks course_id=%s program_id=%s status=%s rows=%s",
        course_id, program_id, status, len(rows),
    )
    return [TaskListing(*row) for row in rows]


def get_task(db: Session, task_id: int) -> Optional[TaskListing]:
    row = _task_listing_query(db).filter(Task.id == task_id).first()
    return TaskListing(*row) if row is not None else None


def iter_tasks(
    db: Session,
    course_id: Optional[int] = None,
    program_id: Optional[int] = None,
    batch_size: int = 500,
) -> Iterator[Task]:
    """Stream matching tasks in batches, for aggregation passes."""
    query = db.query(Task).join(Course, Task.course_id == Course.id)
    query = _filter_tasks(query, course_id, program_id)
    return iter(query.yield_per(batch_size))
