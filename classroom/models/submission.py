from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from classroom.db.base_class import Base, generate_id


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Submission(Base):
    __tablename__ = "submissions"

    id = Column(String(36), primary_key=True, default=generate_id)

    assignment_id = Column(String(36), ForeignKey("assignments.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    summary = Column(Text, nullable=True)
    # file store key or absolute URL
    file_url = Column(String(2048), nullable=True)

    submitted_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    # No unique (assignment_id, student_id): resubmission semantics are undecided,
    # readers surface the newest row.

    assignment = relationship("Assignment", back_populates="submissions")
    student = relationship("User", back_populates="submissions")
    feedback = relationship(
        "Feedback",
        back_populates="submission",
        uselist=False,
        cascade="all, delete-orphan",
    )
