from enum import Enum


class TaskType(str, Enum):
    QUIZ = "Quiz"
    ASSIGNMENT = "Assignment"
    EXAM = "Exam"
    GROUP_PROJECT = "Group Project"


class TaskStatus(str, Enum):
    NOT_COMPLETED = "Not Completed"
    IN_PROGRESS = "In progress"
    COMPLETED = "Completed"


class TaskPriority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class SubmissionState(str, Enum):
    """
    Whether the work for a task has been handed in.

    Serialized as "submitted" / "not_submitted". Older clients sent the
    strings "Yes" / "No" or booleans; parse() accepts those too.
    """

    SUBMITTED = "submitted"
    NOT_SUBMITTED = "not_submitted"

    @classmethod
    def parse(cls, raw):
        if raw is None:
            return cls.NOT_SUBMITTED
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, bool):
            return cls.SUBMITTED if raw else cls.NOT_SUBMITTED
        if isinstance(raw, str):
            value = raw.strip().lower()
            if value in ("", "no", "false"):
                return cls.NOT_SUBMITTED
            if value in ("yes", "true"):
                return cls.SUBMITTED
            return cls(value)
        raise ValueError(f"Invalid submission state: {raw!r}")
