import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import Course, Program, Task
from app.services.entity_store import write_transaction

logger = logging.getLogger(__name__)


def delete_program(db: Session, program_id: int) -> int:
    """
    Delete a program together with its courses and their tasks.

    Children go first: tasks, then courses, then the program row. All three
    statements share one transaction, so a failure in any step leaves the
    database exactly as it was. Returns 1 if the program existed, else 0.
    """
    course_ids = select(Course.id).where(Course.program_id == program_id)

    with write_transaction(db, f"delete program {program_id}"):
        tasks_deleted = (
            db.query(Task)
            .filter(Task.course_id.in_(course_ids))
            .delete(synchronize_session=False)
        )
        courses_deleted = (
            db.query(Course)
            .filter(Course.program_id == program_id)
            .delete(synchronize_session=False)
        )
        deleted = (
            db.query(Program)
            .filter(Program.id == program_id)
            .delete(synchronize_session=False)
        )

    logger.info(
        "Program delete id=%s deleted=%s courses=%s tasks=%s",
        program_id, deleted, courses_deleted, tasks_deleted,
    )
    return deleted


def delete_course(db: Session, course_id: int) -> int:
    """Delete a course and its tasks in one transaction."""
    with write_transaction(db, f"delete course {course_id}"):
        tasks_deleted = (
            db.query(Task)
            .filter(Task.course_id == course_id)
            .delete(synchronize_session=False)
        )
        deleted = (
            db.query(Course)
            .filter(Course.id == course_id)
            .delete(synchronize_session=False)
        )

    logger.info("Course delete id=%s deleted=%s tasks=%s", course_id, deleted, tasks_deleted)
    return deleted


def delete_task(db: Session, task_id: int) -> int:
    with write_transaction(db, f"delete task {task_id}"):
        deleted = (
            db.query(Task)
            .filter(Task.id == task_id)
            .delete(synchronize_session=False)
        )

    logger.info("Task delete id=%s deleted=%s", task_id, deleted)
    return deleted
