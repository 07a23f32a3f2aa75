from typing import Optional

from pydantic import BaseModel


class ProgramRequest(BaseModel):
    name: Optional[str] = None
    college: Optional[str] = None
    semester: Optional[str] = None


class ProgramResponse(BaseModel):
    id: int
    name: str
    college: Optional[str] = None
    semester: Optional[str] = None

    class Config:
        from_attributes = True
