import logging

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from classroom.core import file_store as fs
from classroom.core.current_user import get_optional_user
from classroom.core.deps import get_db
from classroom.core.errors import InvalidFileTypeError
from classroom.core.file_store import LocalFileStore, get_file_store
from classroom.core.permissions import require_teacher
from classroom.models.assignment import Assignment
from classroom.models.submission import Submission
from classroom.models.user import User, UserRole
from classroom.schemas.assignment import (
    AssignmentCreate,
    AssignmentList,
    AssignmentOut,
    AssignmentUpdate,
    StudentAssignmentList,
    UploadOut,
)
from classroom.services import grading
from classroom.services.access import (
    authorize_assignment,
    authorize_student,
    authorize_teacher,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _assignment_row(a: Assignment, store: LocalFileStore, submissions: int = 0) -> dict:
    return {
        "id": a.id,
        "course_id": a.course_id,
        "title": a.title,
        "description": a.description,
        "due_date": a.due_date,
        "attachment": store.to_url(a.attachment),
        "submissions": submissions,
        "created_at": a.created_at,
        "updated_at": a.updated_at,
    }


@router.get("/teacher/assignments", response_model=AssignmentList)
def list_teacher_assignments(
    course_id: str = Query(alias="courseId", min_length=1),
    db: Session = Depends(get_db),
    me: User | None = Depends(get_optional_user),
    store: LocalFileStore = Depends(get_file_store),
):
    authorize_teacher(db, me, course_id)

    rows = (
        db.query(Assignment, func.count(Submission.id))
        .outerjoin(Submission, Submission.assignment_id == Assignment.id)
        .filter(Assignment.course_id == course_id)
        .group_by(Assignment.id)
        .order_by(Assignment.due_date.asc(), Assignment.id.asc())
        .all()
    )

    return {"assignments": [_assignment_row(a, store, count) for a, count in rows]}


@router.post(
    "/teacher/assignments",
    response_model=AssignmentOut,
    status_code=status.HTTP_201_CREATED,
)
def create_assignment(
    payload: AssignmentCreate,
    db: Session = Depends(get_db),
    me: User | None = Depends(get_optional_user),
    store: LocalFileStore = Depends(get_file_store),
):
    authorize_teacher(db, me, payload.course_id)

    a = Assignment(
        course_id=payload.course_id,
        title=payload.title,
        description=payload.description,
        due_date=payload.due_date,
        attachment=payload.attachment or None,
    )
    db.add(a)
    db.commit()
    db.refresh(a)

    logger.info("Teacher %s created assignment %s in course %s", me.id, a.id, a.course_id)
    return _assignment_row(a, store)


@router.put("/teacher/assignments/{assignment_id}", response_model=AssignmentOut)
def update_assignment(
    assignment_id: str,
    payload: AssignmentUpdate,
    db: Session = Depends(get_db),
    me: User | None = Depends(get_optional_user),
    store: LocalFileStore = Depends(get_file_store),
):
    a = authorize_assignment(db, me, assignment_id, UserRole.TEACHER)

    # course_id is never changed; attachment is the only field that may be cleared
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None and field != "attachment":
            continue
        setattr(a, field, value)

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(a)
    count = db.query(func.count(Submission.id)).filter(Submission.assignment_id == a.id).scalar() or 0
    return _assignment_row(a, store, count)


@router.post("/teacher/assignments/upload", response_model=UploadOut)
def upload_assignment_file(
    file: UploadFile = File(...),
    teacher: User = Depends(require_teacher),
    store: LocalFileStore = Depends(get_file_store),
):
    if not fs.is_pdf(file):
        raise InvalidFileTypeError("Only PDF files are allowed")

    key = store.upload(file, fs.ASSIGNMENTS)
    return {"url": store.to_url(key), "key": key}


@router.get("/student/assignments", response_model=StudentAssignmentList)
def list_student_assignments(
    course_id: str = Query(alias="courseId", min_length=1),
    db: Session = Depends(get_db),
    me: User | None = Depends(get_optional_user),
    store: LocalFileStore = Depends(get_file_store),
):
    course = authorize_student(db, me, course_id)

    # only the caller's own submissions are loaded
    assignments = (
        db.query(Assignment)
        .options(
            selectinload(
                Assignment.submissions.and_(Submission.student_id == me.id)
            ).selectinload(Submission.feedback)
        )
        .filter(Assignment.course_id == course.id)
        .order_by(Assignment.due_date.asc())
        .all()
    )

    rows: list[dict] = []
    for a in assignments:
        submission = grading.latest_submission(a, me.id)
        feedback = submission.feedback if submission else None
        rows.append(
            {
                "id": a.id,
                "title": a.title,
                "description": a.description,
                "due_date": a.due_date,
                "attachment": store.to_url(a.attachment),
                "status": grading.review_status(submission),
                "submission_id": submission.id if submission else None,
                "submission": submission.summary if submission else None,
                "submitted_file": store.to_url(submission.file_url) if submission else None,
                "feedback": feedback.comment if feedback else None,
                "grade": feedback.grade if feedback else None,
            }
        )

    return {"assignments": rows}
