from datetime import datetime

from pydantic import BaseModel


class StudentRead(BaseModel):
    id: int
    username: str
    email: str
    created_at: datetime

    class Config:
        from_attributes = True
