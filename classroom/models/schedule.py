from sqlalchemy import Column, DateTime, ForeignKey, String, func
from sqlalchemy.orm import relationship

from classroom.db.base_class import Base, generate_id


class Schedule(Base):
    """A scheduled live class."""

    __tablename__ = "schedules"

    id = Column(String(36), primary_key=True, default=generate_id)
    course_id = Column(String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    teacher_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    subject = Column(String(255), nullable=False)
    topic = Column(String(255), nullable=False)
    time = Column(DateTime(timezone=True), nullable=False)
    meeting_link = Column(String(2048), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    course = relationship("Course", back_populates="schedules")
