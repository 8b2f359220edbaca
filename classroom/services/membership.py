"""
Roster changes: students joining by code or being added by a teacher, and
co-teachers being invited or removed.

Every operation runs its checks first and then issues one insert or delete
on the association table, followed by a single commit.
"""

import logging

from sqlalchemy import Table, delete, insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, load_only, selectinload

from classroom.core.errors import (
    AlreadyCoTeacherError,
    AlreadyEnrolledError,
    AlreadyMainTeacherError,
    NotAStudentError,
    NotATeacherError,
    NotFoundError,
)
from classroom.models.course import Course, course_co_teachers, course_students
from classroom.models.user import User, UserRole
from classroom.services import course_codes
from classroom.services.access import authorize_teacher, require_role

logger = logging.getLogger(__name__)


def _add_member(
    db: Session,
    table: Table,
    course_id: str,
    user_id: str,
    duplicate_error: type[Exception],
) -> None:
    # composite primary key: a concurrent duplicate fails here instead of
    # creating a second row
    try:
        db.execute(insert(table).values(course_id=course_id, user_id=user_id))
        db.commit()
    except IntegrityError:
        db.rollback()
        raise duplicate_error()
    except Exception:
        db.rollback()
        raise


def _get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def join_as_student(db: Session, user: User | None, code: str) -> Course:
    user = require_role(user, UserRole.STUDENT)

    courses = (
        db.query(Course)
        .options(
            load_only(Course.id, Course.name),
            selectinload(Course.students).load_only(User.id),
        )
        .all()
    )
    course = course_codes.decode(code, courses)

    if any(s.id == user.id for s in course.students):
        raise AlreadyEnrolledError()

    _add_member(db, course_students, course.id, user.id, AlreadyEnrolledError)
    logger.info("Student %s joined course %s", user.id, course.id)

    db.refresh(course)
    return course


def enroll_student_by_email(
    db: Session, actor: User | None, course_id: str, email: str
) -> User:
    course = authorize_teacher(db, actor, course_id, selectinload(Course.students))

    student = _get_user_by_email(db, email)
    if not student:
        raise NotFoundError("Student with this email not found")
    if student.role != UserRole.STUDENT:
        raise NotAStudentError()
    if any(s.id == student.id for s in course.students):
        raise AlreadyEnrolledError("This student is already enrolled in this course")

    _add_member(
        db,
        course_students,
        course.id,
        student.id,
        AlreadyEnrolledError,
    )
    logger.info("Teacher %s enrolled student %s in course %s", actor.id, student.id, course_id)
    return student


def invite_co_teacher(
    db: Session, actor: User | None, course_id: str, email: str
) -> User:
    course = authorize_teacher(db, actor, course_id, selectinload(Course.co_teachers))

    invitee = _get_user_by_email(db, email)
    if not invitee:
        raise NotFoundError("Teacher with this email not found")
    if invitee.role != UserRole.TEACHER:
        raise NotATeacherError()
    if course.teacher_id == invitee.id:
        raise AlreadyMainTeacherError()
    if any(ct.id == invitee.id for ct in course.co_teachers):
        raise AlreadyCoTeacherError()

    _add_member(db, course_co_teachers, course.id, invitee.id, AlreadyCoTeacherError)
    logger.info("Teacher %s invited co-teacher %s to course %s", actor.id, invitee.id, course_id)
    return invitee


def remove_co_teacher(
    db: Session, actor: User | None, course_id: str, co_teacher_id: str
) -> None:
    """Remove a co-teacher. Removing someone who is not a co-teacher is a no-op."""
    authorize_teacher(db, actor, course_id)

    try:
        result = db.execute(
            delete(course_co_teachers).where(
                course_co_teachers.c.course_id == course_id,
                course_co_teachers.c.user_id == co_teacher_id,
            )
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Teacher %s removed co-teacher %s from course %s (%d row(s))",
        actor.id,
        co_teacher_id,
        course_id,
        result.rowcount,
    )
