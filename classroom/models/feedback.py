from sqlalchemy import Column, DateTime, Float, ForeignKey, String, Text, func
from sqlalchemy.orm import relationship

from classroom.db.base_class import Base, generate_id


class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(String(36), primary_key=True, default=generate_id)

    # one feedback per submission; the upsert conflicts on this column
    submission_id = Column(
        String(36),
        ForeignKey("submissions.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    teacher_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    comment = Column(Text, nullable=False)
    grade = Column(Float, nullable=True)  # 0..100, NULL = comment only

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    submission = relationship("Submission", back_populates="feedback")
    teacher = relationship("User")
