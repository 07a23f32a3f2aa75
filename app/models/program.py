from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.core.database import Base


class Program(Base):
    __tablename__ = "programs"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    college = Column(String(255), nullable=True)
    semester = Column(String(50), nullable=True)

    courses = relationship("Course", back_populates="program")
