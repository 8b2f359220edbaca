from pydantic import EmailStr, Field

from classroom.schemas.base import CamelModel
from classroom.schemas.user import UserSummary


class JoinCourseRequest(CamelModel):
    code: str = Field(min_length=1)


class JoinedCourse(CamelModel):
    id: str
    name: str


class JoinCourseOut(CamelModel):
    success: bool = True
    message: str
    course: JoinedCourse


class EnrollStudentRequest(CamelModel):
    email: EmailStr
    course_id: str = Field(min_length=1)


class EnrollStudentOut(CamelModel):
    success: bool = True
    message: str
    student: UserSummary
