from fastapi import HTTPException, status


class TrackerError(Exception):
    """Base class for errors raised by the tracker services."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TrackerError):
    """A required field is missing or a value is out of range."""

    status_code = status.HTTP_400_BAD_REQUEST


class ReferenceNotFoundError(TrackerError):
    """A foreign key points at a row that does not exist."""

    status_code = status.HTTP_400_BAD_REQUEST


class StorageError(TrackerError):
    """The database rejected or failed an operation."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def raise_program_not_found():
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Program with that id does not exist"
    )


def raise_course_not_found():
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Course with that id does not exist"
    )


def raise_task_not_found():
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Task with that id does not exist"
    )
