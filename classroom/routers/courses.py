import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from classroom.core.deps import get_db
from classroom.core.permissions import require_student, require_teacher
from classroom.models.course import Course, course_students
from classroom.models.user import User, UserRole
from classroom.schemas.course import (
    CourseCreate,
    CourseRead,
    StudentCourseList,
    TeacherCourseList,
)
from classroom.services.access import membership_filter

logger = logging.getLogger(__name__)

router = APIRouter()

# students shown as avatars on a course card
AVATAR_STUDENTS = 3


@router.get("/teacher/courses", response_model=TeacherCourseList)
def list_teacher_courses(
    db: Session = Depends(get_db),
    teacher: User = Depends(require_teacher),
):
    # main teacher OR co-teacher
    courses = (
        db.query(Course)
        .options(selectinload(Course.students))
        .filter(membership_filter(teacher, UserRole.TEACHER))
        .order_by(Course.created_at.desc())
        .all()
    )

    counts = dict(
        db.execute(
            select(course_students.c.course_id, func.count())
            .where(course_students.c.course_id.in_([c.id for c in courses]))
            .group_by(course_students.c.course_id)
        ).all()
    )

    rows: list[dict] = []
    for c in courses:
        rows.append(
            {
                **CourseRead.model_validate(c).model_dump(),
                "student_count": counts.get(c.id, 0),
                "students": c.students[:AVATAR_STUDENTS],
            }
        )

    return {"courses": rows}


@router.post(
    "/teacher/courses",
    response_model=CourseRead,
    status_code=status.HTTP_201_CREATED,
)
def create_course(
    payload: CourseCreate,
    db: Session = Depends(get_db),
    teacher: User = Depends(require_teacher),
):
    course = Course(
        name=payload.name,
        description=payload.description or None,
        thumbnail=str(payload.thumbnail) if payload.thumbnail else None,
        teacher_id=teacher.id,
    )
    db.add(course)
    db.commit()
    db.refresh(course)

    logger.info("Teacher %s created course %s", teacher.id, course.id)
    return course


@router.get("/student/courses", response_model=StudentCourseList)
def list_student_courses(
    db: Session = Depends(get_db),
    student: User = Depends(require_student),
):
    courses = (
        db.query(Course)
        .options(selectinload(Course.teacher))
        .filter(membership_filter(student, UserRole.STUDENT))
        .order_by(Course.created_at.desc())
        .all()
    )
    return {"courses": courses}
