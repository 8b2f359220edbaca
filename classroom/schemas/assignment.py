from datetime import datetime

from pydantic import Field

from classroom.schemas.base import CamelModel


class AssignmentCreate(CamelModel):
    course_id: str = Field(min_length=1)
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    due_date: datetime
    # key returned by the upload endpoint, or an absolute URL
    attachment: str | None = None


class AssignmentUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    due_date: datetime | None = None
    attachment: str | None = None


class AssignmentRead(CamelModel):
    id: str
    course_id: str
    title: str
    description: str
    due_date: datetime
    attachment: str | None = None
    submissions: int = 0
    created_at: datetime
    updated_at: datetime


class AssignmentOut(AssignmentRead):
    success: bool = True


class AssignmentList(CamelModel):
    success: bool = True
    assignments: list[AssignmentRead]


class StudentAssignmentRead(CamelModel):
    id: str
    title: str
    description: str
    due_date: datetime
    attachment: str | None = None
    status: str  # "pending" | "submitted" | "feedback_given" | "graded"
    submission_id: str | None = None
    submission: str | None = None
    submitted_file: str | None = None
    feedback: str | None = None
    grade: float | None = None


class StudentAssignmentList(CamelModel):
    success: bool = True
    assignments: list[StudentAssignmentRead]


class UploadOut(CamelModel):
    success: bool = True
    url: str
    key: str
