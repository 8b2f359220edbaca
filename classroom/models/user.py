import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from classroom.db.base_class import Base, generate_id


class UserRole(str, enum.Enum):
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    # fixed at registration
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    taught_courses = relationship("Course", back_populates="teacher")
    co_taught_courses = relationship(
        "Course", secondary="course_co_teachers", back_populates="co_teachers"
    )
    enrolled_courses = relationship(
        "Course", secondary="course_students", back_populates="students"
    )

    submissions = relationship(
        "Submission", back_populates="student", cascade="all, delete-orphan"
    )
