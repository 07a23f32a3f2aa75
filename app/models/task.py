from sqlalchemy import Column, Date, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.models.enums import SubmissionState


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    type = Column(String(30), nullable=False)
    # nullable so imported rows without a date stay readable; writes require one
    due_date = Column(Date, nullable=True, index=True)
    status = Column(String(30), nullable=False)
    priority = Column(String(10), nullable=True)
    weight = Column(Float, nullable=True)
    submission = Column(String(20), nullable=False, default=SubmissionState.NOT_SUBMITTED.value)
    notes = Column(Text, nullable=True)

    course = relationship("Course", back_populates="tasks")
