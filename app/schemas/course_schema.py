from typing import Optional

from pydantic import BaseModel

from app.services.queries import CourseListing


class CourseRequest(BaseModel):
    program_id: Optional[int] = None
    code: Optional[str] = None
    name: Optional[str] = None


class CourseResponse(BaseModel):
    id: int
    program_id: int
    code: str
    name: str
    program_name: Optional[str] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_listing(cls, listing: CourseListing) -> "CourseResponse":
        course = listing.course
        return cls(
            id=course.id,
            program_id=course.program_id,
            code=course.code,
            name=course.name,
            program_name=listing.program_name,
        )
