import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session, selectinload

from classroom.core import file_store as fs
from classroom.core.current_user import get_optional_user
from classroom.core.deps import get_db
from classroom.core.errors import DomainRuleError
from classroom.core.file_store import LocalFileStore, get_file_store
from classroom.models.submission import Submission
from classroom.models.user import User, UserRole
from classroom.schemas.feedback import FeedbackCreate, FeedbackOut
from classroom.schemas.submission import SubmissionList, SubmissionOut
from classroom.services import feedback as feedback_service
from classroom.services import grading
from classroom.services.access import authorize_assignment

logger = logging.getLogger(__name__)

router = APIRouter()


def _submission_row(s: Submission, store: LocalFileStore) -> dict:
    return {
        "id": s.id,
        "assignment_id": s.assignment_id,
        "student": s.student,
        "summary": s.summary,
        "file_url": store.to_url(s.file_url),
        "submitted_at": s.submitted_at,
        "status": grading.review_status(s),
        "feedback": s.feedback.comment if s.feedback else None,
        "grade": s.feedback.grade if s.feedback else None,
    }


@router.get(
    "/teacher/assignments/{assignment_id}/submissions",
    response_model=SubmissionList,
)
def list_submissions_for_assignment(
    assignment_id: str,
    db: Session = Depends(get_db),
    me: User | None = Depends(get_optional_user),
    store: LocalFileStore = Depends(get_file_store),
):
    authorize_assignment(db, me, assignment_id, UserRole.TEACHER)

    subs = (
        db.query(Submission)
        .options(selectinload(Submission.student), selectinload(Submission.feedback))
        .filter(Submission.assignment_id == assignment_id)
        .order_by(Submission.submitted_at.desc())
        .all()
    )

    return {"submissions": [_submission_row(s, store) for s in subs]}


@router.post(
    "/student/assignments/{assignment_id}/submissions",
    response_model=SubmissionOut,
    status_code=status.HTTP_201_CREATED,
)
def submit_assignment(
    assignment_id: str,
    summary: str | None = Form(default=None),
    file: UploadFile | None = File(default=None),
    db: Session = Depends(get_db),
    me: User | None = Depends(get_optional_user),
    store: LocalFileStore = Depends(get_file_store),
):
    assignment = authorize_assignment(db, me, assignment_id, UserRole.STUDENT)

    summary = (summary or "").strip() or None
    if summary is None and file is None:
        raise DomainRuleError("A summary or a file is required")

    file_key = store.upload(file, fs.SUBMISSIONS) if file is not None else None

    # every submit adds a row; readers show the newest one
    s = Submission(
        assignment_id=assignment.id,
        student_id=me.id,
        summary=summary,
        file_url=file_key,
    )
    db.add(s)

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(s)
    logger.info("Student %s submitted assignment %s", me.id, assignment.id)
    return _submission_row(s, store)


@router.post(
    "/teacher/assignments/submissions/{submission_id}/feedback",
    response_model=FeedbackOut,
    responses={
        403: {"description": "Not a teacher of the submission's course"},
        404: {"description": "Submission not found"},
    },
)
def submit_feedback(
    submission_id: str,
    payload: FeedbackCreate,
    db: Session = Depends(get_db),
    me: User | None = Depends(get_optional_user),
):
    feedback = feedback_service.submit_feedback(
        db,
        me,
        submission_id,
        comment=payload.comment,
        grade=payload.grade,
    )
    return {"feedback": feedback}
