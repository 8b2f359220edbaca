from pydantic import Field

from classroom.schemas.base import CamelModel


class FeedbackCreate(CamelModel):
    comment: str = Field(min_length=1)
    grade: float | None = Field(default=None, ge=0, le=100)


class FeedbackRead(CamelModel):
    id: str
    comment: str
    grade: float | None = None


class FeedbackOut(CamelModel):
    success: bool = True
    feedback: FeedbackRead
