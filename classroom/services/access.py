"""
Course access checks.

Teachers reach a course as its main teacher or as a co-teacher; students
reach it only when enrolled. The membership test is part of the course
query itself, so a course the caller cannot see and a course that does not
exist produce the same ``NotFoundOrDeniedError``.
"""

from sqlalchemy import or_
from sqlalchemy.orm import Session

from classroom.core.errors import (
    AuthenticationError,
    NotFoundOrDeniedError,
    WrongRoleError,
)
from classroom.models.assignment import Assignment
from classroom.models.course import Course
from classroom.models.user import User, UserRole


def require_role(user: User | None, role: UserRole) -> User:
    if user is None:
        raise AuthenticationError()
    if user.role != role:
        raise WrongRoleError()
    return user


def membership_filter(user: User, role: UserRole):
    if role == UserRole.TEACHER:
        return or_(
            Course.teacher_id == user.id,
            Course.co_teachers.any(User.id == user.id),
        )
    return Course.students.any(User.id == user.id)


def authorize(
    db: Session,
    user: User | None,
    course_id: str,
    required_role: UserRole,
    *load_options,
) -> Course:
    """Return the course if ``user`` may act on it in ``required_role``.

    ``load_options`` are passed to ``Query.options`` so callers can eager
    load the relations they are about to read.
    """
    user = require_role(user, required_role)

    course = (
        db.query(Course)
        .options(*load_options)
        .filter(Course.id == course_id, membership_filter(user, required_role))
        .first()
    )
    if course is None:
        raise NotFoundOrDeniedError()
    return course


def authorize_teacher(db: Session, user: User | None, course_id: str, *load_options) -> Course:
    return authorize(db, user, course_id, UserRole.TEACHER, *load_options)


def authorize_student(db: Session, user: User | None, course_id: str, *load_options) -> Course:
    return authorize(db, user, course_id, UserRole.STUDENT, *load_options)


def authorize_assignment(
    db: Session,
    user: User | None,
    assignment_id: str,
    required_role: UserRole,
) -> Assignment:
    """Return the assignment if its course is visible to ``user`` in ``required_role``.

    A missing assignment and one in a course the caller cannot see give the
    same ``NotFoundOrDeniedError``.
    """
    user = require_role(user, required_role)

    assignment = (
        db.query(Assignment)
        .join(Assignment.course)
        .filter(Assignment.id == assignment_id, membership_filter(user, required_role))
        .first()
    )
    if assignment is None:
        raise NotFoundOrDeniedError()
    return assignment


def is_course_teacher(course: Course, user: User) -> bool:
    """In-memory variant for a course that is already loaded."""
    if user.role != UserRole.TEACHER:
        return False
    return course.teacher_id == user.id or any(
        t.id == user.id for t in course.co_teachers
    )
