from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session, selectinload

from classroom.core.config import settings
from classroom.core.current_user import get_optional_user
from classroom.core.deps import get_db
from classroom.models.assignment import Assignment
from classroom.models.course import Course
from classroom.models.submission import Submission
from classroom.models.user import User
from classroom.schemas.people import StudentPeopleOut, TeacherPeopleOut
from classroom.services import course_codes, grading
from classroom.services.access import authorize_student, authorize_teacher

router = APIRouter()


def _grades_loaded():
    return (
        selectinload(Course.assignments)
        .selectinload(Assignment.submissions)
        .selectinload(Submission.feedback)
    )


def _shareable_link(request: Request, course_id: str) -> str:
    origin = request.headers.get("origin") or request.headers.get("host")
    if origin:
        # Origin already carries a scheme, Host does not
        if "://" not in origin:
            protocol = request.headers.get("x-forwarded-proto") or "http"
            origin = f"{protocol}://{origin}"
        base_url = origin
    else:
        base_url = settings.PUBLIC_BASE_URL
    return f"{base_url.rstrip('/')}/student/enroll?courseId={course_id}"


@router.get("/teacher/people", response_model=TeacherPeopleOut)
def teacher_people(
    request: Request,
    course_id: str = Query(alias="courseId", min_length=1),
    db: Session = Depends(get_db),
    me: User | None = Depends(get_optional_user),
):
    course = authorize_teacher(
        db,
        me,
        course_id,
        selectinload(Course.teacher),
        selectinload(Course.co_teachers),
        selectinload(Course.students),
        _grades_loaded(),
    )

    team_members = [
        {
            "id": course.teacher.id,
            "name": course.teacher.name,
            "email": course.teacher.email,
            "role": "Teacher",
        }
    ] + [
        {"id": ct.id, "name": ct.name, "email": ct.email, "role": "Co-Teacher"}
        for ct in course.co_teachers
    ]

    return {
        "student_performance": grading.compute_roster(course),
        "roster": course.students,
        "shareable_link": _shareable_link(request, course.id),
        "teacher_code": course_codes.encode(course, course_codes.TEACHER_PREFIX),
        "student_code": course_codes.encode(course, course_codes.STUDENT_PREFIX),
        "team_members": team_members,
        "main_teacher": course.teacher,
        "co_teachers": course.co_teachers,
        "is_main_teacher": course.teacher_id == me.id,
    }


@router.get("/student/people", response_model=StudentPeopleOut)
def student_people(
    request: Request,
    course_id: str = Query(alias="courseId", min_length=1),
    db: Session = Depends(get_db),
    me: User | None = Depends(get_optional_user),
):
    course = authorize_student(
        db,
        me,
        course_id,
        selectinload(Course.students),
        _grades_loaded(),
    )

    performances = grading.compute_roster(course)

    return {
        "current_student_average": grading.current_student_average(performances, me.id),
        "top_performers": grading.rank(performances, limit=settings.TOP_PERFORMERS_LIMIT),
        "roster": course.students,
        "shareable_link": _shareable_link(request, course.id),
    }
