import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from classroom.core.current_user import get_optional_user
from classroom.core.deps import get_db
from classroom.models.schedule import Schedule
from classroom.models.user import User
from classroom.schemas.schedule import ScheduleCreate, ScheduleList, ScheduleOut
from classroom.services.access import authorize_student, authorize_teacher

logger = logging.getLogger(__name__)

router = APIRouter()


def _upcoming(db: Session, course_id: str) -> list[Schedule]:
    return (
        db.query(Schedule)
        .filter(Schedule.course_id == course_id)
        .order_by(Schedule.time.asc())
        .all()
    )


@router.get("/teacher/schedule", response_model=ScheduleList)
def list_teacher_schedule(
    course_id: str = Query(alias="courseId", min_length=1),
    db: Session = Depends(get_db),
    me: User | None = Depends(get_optional_user),
):
    course = authorize_teacher(db, me, course_id)
    return {"schedules": _upcoming(db, course.id)}


@router.post(
    "/teacher/schedule",
    response_model=ScheduleOut,
    status_code=status.HTTP_201_CREATED,
)
def create_schedule(
    payload: ScheduleCreate,
    db: Session = Depends(get_db),
    me: User | None = Depends(get_optional_user),
):
    course = authorize_teacher(db, me, payload.course_id)

    schedule = Schedule(
        course_id=course.id,
        teacher_id=me.id,
        subject=payload.subject,
        topic=payload.topic,
        time=payload.time,
        meeting_link=str(payload.meeting_link),
    )
    db.add(schedule)
    db.commit()
    db.refresh(schedule)

    logger.info("Teacher %s scheduled class %s for course %s", me.id, schedule.id, course.id)
    return schedule


@router.get("/student/schedule", response_model=ScheduleList)
def list_student_schedule(
    course_id: str = Query(alias="courseId", min_length=1),
    db: Session = Depends(get_db),
    me: User | None = Depends(get_optional_user),
):
    course = authorize_student(db, me, course_id)
    return {"schedules": _upcoming(db, course.id)}
