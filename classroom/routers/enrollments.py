from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from classroom.core.current_user import get_optional_user
from classroom.core.deps import get_db
from classroom.models.user import User
from classroom.schemas.enrollment import (
    EnrollStudentOut,
    EnrollStudentRequest,
    JoinCourseOut,
    JoinCourseRequest,
)
from classroom.services import membership

router = APIRouter()


@router.post(
    "/student/courses/join",
    response_model=JoinCourseOut,
    responses={
        400: {"description": "Invalid code format or already enrolled"},
        404: {"description": "No course matches the code"},
    },
)
def join_course(
    payload: JoinCourseRequest,
    db: Session = Depends(get_db),
    me: User | None = Depends(get_optional_user),
):
    course = membership.join_as_student(db, me, payload.code)
    return {
        "message": "Successfully joined the course",
        "course": {"id": course.id, "name": course.name},
    }


@router.post(
    "/teacher/students",
    response_model=EnrollStudentOut,
    status_code=status.HTTP_201_CREATED,
)
def enroll_student(
    payload: EnrollStudentRequest,
    db: Session = Depends(get_db),
    me: User | None = Depends(get_optional_user),
):
    student = membership.enroll_student_by_email(db, me, payload.course_id, payload.email)
    return {
        "message": f"Successfully enrolled {student.name}",
        "student": student,
    }
