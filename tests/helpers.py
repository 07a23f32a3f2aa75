from datetime import date

from app.services import entity_store


def add_task(db, course_id, title="Homework", due_date=date(2025, 6, 12), status="Not Completed", **extra):
    extra.setdefault("type", "Assignment")
    return entity_store.create_task(
        db,
        course_id=course_id,
        title=title,
        due_date=due_date,
        status=status,
        **extra,
    )
