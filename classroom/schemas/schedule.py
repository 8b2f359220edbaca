from datetime import datetime

from pydantic import Field, HttpUrl

from classroom.schemas.base import CamelModel


class ScheduleCreate(CamelModel):
    course_id: str = Field(min_length=1)
    subject: str = Field(min_length=1, max_length=255)
    topic: str = Field(min_length=1, max_length=255)
    time: datetime
    meeting_link: HttpUrl


class ScheduleRead(CamelModel):
    id: str
    subject: str
    topic: str
    time: datetime
    meeting_link: str


class ScheduleOut(ScheduleRead):
    success: bool = True


class ScheduleList(CamelModel):
    success: bool = True
    schedules: list[ScheduleRead]
