from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from classroom.db.base_class import Base, generate_id

# Membership relations. The composite primary keys make every add an
# add-to-set: a second insert of the same pair fails instead of duplicating.
course_students = Table(
    "course_students",
    Base.metadata,
    Column("course_id", String(36), ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)

course_co_teachers = Table(
    "course_co_teachers",
    Base.metadata,
    Column("course_id", String(36), ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    thumbnail: Mapped[str | None] = mapped_column(String(2048))
    teacher_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    teacher = relationship("User", back_populates="taught_courses")
    co_teachers = relationship(
        "User", secondary=course_co_teachers, back_populates="co_taught_courses"
    )
    students = relationship(
        "User",
        secondary=course_students,
        back_populates="enrolled_courses",
        order_by="User.name",
    )

    assignments = relationship(
        "Assignment",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="Assignment.due_date",
    )
    schedules = relationship(
        "Schedule",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="Schedule.time",
    )
    resources = relationship(
        "Resource", back_populates="course", cascade="all, delete-orphan"
    )
