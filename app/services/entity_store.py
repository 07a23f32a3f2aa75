import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import ReferenceNotFoundError, StorageError, ValidationError
from app.models import Course, Program, Task
from app.models.enums import SubmissionState, TaskPriority, TaskStatus, TaskType

logger = logging.getLogger(__name__)


@contextmanager
def write_transaction(db: Session, action: str):
    """
    Run the block as one unit of work: commit on success, roll back on any
    error. Database errors come out as StorageError.
    """
    try:
        yield
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("%s failed", action)
        raise StorageError(f"{action} failed: {e.__class__.__name__}") from e
    except Exception:
        db.rollback()
        raise


# ---- field normalisation ----

def _required_text(value, label: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{label} is required")
    return str(value).strip()


def _optional_text(value) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _required_id(value, label: str) -> int:
    if value is None or value == "":
        raise ValidationError(f"{label} is required")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be an integer")


def _enum_value(enum_cls, value, label: str, required: bool = True) -> Optional[str]:
    if value is None or value == "":
        if required:
            raise ValidationError(f"{label} is required")
        return None
    try:
        return enum_cls(value).value
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"{label} must be one of: {allowed}")


def _due_date(value) -> date:
    if value is None or value == "":
        raise ValidationError("due_date is required")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError("due_date must be a date in YYYY-MM-DD format")


def _weight(value) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        weight = float(value)
    except (TypeError, ValueError):
        raise ValidationError("weight must be a number")
    if not 0 <= weight <= 100:
        raise ValidationError("weight must be between 0 and 100")
    return weight


def _submission(value) -> str:
    try:
        return SubmissionState.parse(value).value
    except ValueError:
        raise ValidationError("submission must be 'submitted' or 'not_submitted'")


def _require_program(db: Session, program_id: int) -> None:
    if db.get(Program, program_id) is None:
        raise ReferenceNotFoundError(f"Program {program_id} does not exist")


def _require_course(db: Session, course_id: int) -> None:
    if db.get(Course, course_id) is None:
        raise ReferenceNotFoundError(f"Course {course_id} does not exist")


# ---- programs ----

def create_program(db: Session, name, college=None, semester=None) -> Program:
    program = Program(
        name=_required_text(name, "Program name"),
        college=_optional_text(college),
        semester=_optional_text(semester),
    )
    with write_transaction(db, "create program"):
        db.add(program)
    db.refresh(program)
    logger.info("Program created id=%s name=%r", program.id, program.name)
    return program


def update_program(db: Session, program_id: int, name, college=None, semester=None) -> int:
    """Replace every column of the program; omitted optionals become null."""
    values = {
        "name": _required_text(name, "Program name"),
        "college": _optional_text(college),
        "semester": _optional_text(semester),
    }
    with write_transaction(db, f"update program {program_id}"):
        updated = (
            db.query(Program)
            .filter(Program.id == program_id)
            .update(values, synchronize_session=False)
        )
    logger.info("Program update id=%s updated=%s", program_id, updated)
    return updated


# ---- courses ----

def _course_values(db: Session, program_id, code, name) -> dict:
    values = {
        "program_id": _required_id(program_id, "program_id"),
        "code": _required_text(code, "code"),
        "name": _required_text(name, "name"),
    }
    _require_program(db, values["program_id"])
    return values


def create_course(db: Session, program_id, code, name) -> Course:
    course = Course(**_course_values(db, program_id, code, name))
    with write_transaction(db, "create course"):
        db.add(course)
    db.refresh(course)
    logger.info("Course created id=%s program_id=%s code=%r", course.id, course.program_id, course.code)
    return course


def update_course(db: Session, course_id: int, program_id, code, name) -> int:
    values = _course_values(db, program_id, code, name)
    with write_transaction(db, f"update course {course_id}"):
        updated = (
            db.query(Course)
            .filter(Course.id == course_id)
            .update(values, synchronize_session=False)
        )
    logger.info("Course update id=%s updated=%s", course_id, updated)
    return updated


# ---- tasks ----

_TASK_FIELDS = (
    "course_id", "title", "type", "due_date", "status",
    "priority", "weight", "submission", "notes",
)


def _task_values(db: Session, course_id, title, type, due_date, status,
                 priority=None, weight=None, submission=None, notes=None) -> dict:
    values = {
        "course_id": _required_id(course_id, "course_id"),
        "title": _required_text(title, "title"),
        "type": _enum_value(TaskType, type, "type"),
        "due_date": _due_date(due_date),
        "status": _enum_value(TaskStatus, status, "status"),
        "priority": _enum_value(TaskPriority, priority, "priority", required=False),
        "weight": _weight(weight),
        "submission": _submission(submission),
        "notes": _optional_text(notes),
    }
    _require_course(db, values["course_id"])
    return values


def create_task(db: Session, course_id, title, type, due_date, status,
                priority=None, weight=None, submission=None, notes=None) -> Task:
    task = Task(**_task_values(db, course_id, title, type, due_date, status,
                               priority, weight, submission, notes))
    with write_transaction(db, "create task"):
        db.add(task)
    db.refresh(task)
    logger.info("Task created id=%s course_id=%s due=%s", task.id, task.course_id, task.due_date)
    return task


def update_task(db: Session, task_id: int, course_id, title, type, due_date, status,
                priority=None, weight=None, submission=None, notes=None) -> int:
    """
    Full-record replace: the caller sends every field. Optional fields that are
    left out are stored as null, they are not kept from the previous version.
    Use patch_task to change only some fields.
    """
    values = _task_values(db, course_id, title, type, due_date, status,
                          priority, weight, submission, notes)
    with write_transaction(db, f"update task {task_id}"):
        updated = (
            db.query(Task)
            .filter(Task.id == task_id)
            .update(values, synchronize_session=False)
        )
    logger.info("Task update id=%s updated=%s", task_id, updated)
    return updated


def patch_task(db: Session, task_id: int, **fields) -> int:
    """Change only the supplied fields; the merged record is validated as a whole."""
    task = db.get(Task, task_id)
    if task is None:
        return 0

    unknown = set(fields) - set(_TASK_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown task fields: {', '.join(sorted(unknown))}")

    merged = {name: getattr(task, name) for name in _TASK_FIELDS}
    merged.update(fields)
    values = _task_values(db, **merged)

    with write_transaction(db, f"patch task {task_id}"):
        for name, value in values.items():
            setattr(task, name, value)
    logger.info("Task patch id=%s fields=%s", task_id, sorted(fields))
    return 1
