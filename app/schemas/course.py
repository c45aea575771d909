from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from app.services.schedule import CLOCK_PATTERN, clock_value

Weekday = Literal[
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"
]


class CourseFields(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    instructor: str = Field(min_length=1, max_length=255)
    credits: int = Field(ge=0)
    capacity: int = Field(gt=0)
    day: Weekday
    start_time: str = Field(pattern=CLOCK_PATTERN)
    end_time: str = Field(pattern=CLOCK_PATTERN)
    semester: str = Field(min_length=1, max_length=64)
    description: str | None = None

    @field_validator("name", "instructor", "semester")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @model_validator(mode="after")
    def check_time_order(self):
        if clock_value(self.start_time) >= clock_value(self.end_time):
            raise ValueError("start_time must be before end_time")
        return self


class CourseCreate(CourseFields):
    code: str = Field(min_length=1, max_length=32)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class CourseUpdate(CourseFields):
    pass


class CourseRead(BaseModel):
    id: int
    code: str
    name: str
    instructor: str
    credits: int
    capacity: int
    enrolled: int
    day: str
    start_time: str
    end_time: str
    semester: str
    description: str | None = None

    class Config:
        from_attributes = True
