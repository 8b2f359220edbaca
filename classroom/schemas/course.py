from datetime import datetime
from typing import Literal

from pydantic import Field, HttpUrl

from classroom.schemas.base import CamelModel
from classroom.schemas.user import UserSummary


class CourseCreate(CamelModel):
    name: str = Field(min_length=3, max_length=100)
    description: str | None = Field(default=None, min_length=10, max_length=500)
    # the dashboard form sends "" when the field is left blank
    thumbnail: HttpUrl | Literal[""] | None = None


class CourseRead(CamelModel):
    success: bool = True
    id: str
    name: str
    description: str | None = None
    thumbnail: str | None = None
    teacher_id: str
    created_at: datetime
    updated_at: datetime


class TeacherCourseRead(CourseRead):
    student_count: int
    # first few students, for avatars
    students: list[UserSummary]


class StudentCourseRead(CourseRead):
    teacher: UserSummary


class TeacherCourseList(CamelModel):
    success: bool = True
    courses: list[TeacherCourseRead]


class StudentCourseList(CamelModel):
    success: bool = True
    courses: list[StudentCourseRead]
