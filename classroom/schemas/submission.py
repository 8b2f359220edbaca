from datetime import datetime

from classroom.schemas.base import CamelModel
from classroom.schemas.user import UserSummary


class SubmissionRead(CamelModel):
    id: str
    assignment_id: str
    student: UserSummary
    summary: str | None = None
    file_url: str | None = None
    submitted_at: datetime
    status: str  # "submitted" | "feedback_given" | "graded"
    feedback: str | None = None
    grade: float | None = None


class SubmissionOut(SubmissionRead):
    success: bool = True


class SubmissionList(CamelModel):
    success: bool = True
    submissions: list[SubmissionRead]
