from pydantic import EmailStr, Field

from classroom.schemas.base import CamelModel
from classroom.schemas.user import UserSummary


class InviteCoTeacherRequest(CamelModel):
    email: EmailStr
    course_id: str = Field(min_length=1)


class InviteCoTeacherOut(CamelModel):
    success: bool = True
    message: str
    co_teacher: UserSummary
