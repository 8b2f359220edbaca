from datetime import datetime

from pydantic import EmailStr, Field

from classroom.models.user import UserRole
from classroom.schemas.base import CamelModel


class UserCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=8, max_length=72)
    role: UserRole


class UserSummary(CamelModel):
    id: str
    name: str
    email: str


class UserRead(UserSummary):
    role: UserRole
    created_at: datetime
