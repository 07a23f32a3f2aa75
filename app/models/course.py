from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from app.core.database import Base


class Course(Base):
    __tablename__ = "courses"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    program_id = Column(Integer, ForeignKey("programs.id"), nullable=False, index=True)
    code = Column(String(30), nullable=False)
    name = Column(String(255), nullable=False)

    program = relationship("Program", back_populates="courses")
    tasks = relationship("Task", back_populates="course")
