from datetime import datetime

from pydantic import BaseModel


class RegistrationCreate(BaseModel):
    course_id: int


class RegistrationRead(BaseModel):
    id: int
    student_id: int
    course_id: int
    status: str
    registered_at: datetime

    class Config:
        from_attributes = True


class RegistrationRow(RegistrationRead):
    """Registration joined with course and student display fields."""

    code: str
    name: str
    instructor: str
    credits: int
    day: str
    start_time: str
    end_time: str
    username: str
