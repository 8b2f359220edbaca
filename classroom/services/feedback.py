import logging

from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, selectinload

from classroom.core.errors import AuthorizationError, NotFoundError
from classroom.db.base_class import generate_id
from classroom.models.assignment import Assignment
from classroom.models.course import Course
from classroom.models.feedback import Feedback
from classroom.models.submission import Submission
from classroom.models.user import User, UserRole
from classroom.services.access import is_course_teacher, require_role

logger = logging.getLogger(__name__)

# dialects with INSERT .. ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _upsert_insert(db: Session):
    dialect = db.get_bind().dialect.name
    try:
        return _UPSERT_INSERTS[dialect]
    except KeyError:
        raise RuntimeError(f"Feedback upsert is not supported on {dialect}") from None


def submit_feedback(
    db: Session,
    teacher: User | None,
    submission_id: str,
    comment: str,
    grade: float | None = None,
) -> Feedback:
    """Create or overwrite the feedback of a submission.

    The write is a single ``INSERT .. ON CONFLICT (submission_id) DO UPDATE``
    so two graders racing on the same submission still leave one row, holding
    whichever write landed last. Omitting ``grade`` clears a previous grade.
    """
    teacher = require_role(teacher, UserRole.TEACHER)

    submission = (
        db.query(Submission)
        .options(
            selectinload(Submission.assignment)
            .selectinload(Assignment.course)
            .selectinload(Course.co_teachers)
        )
        .filter(Submission.id == submission_id)
        .first()
    )
    if not submission:
        raise NotFoundError("Submission not found")

    if not is_course_teacher(submission.assignment.course, teacher):
        raise AuthorizationError()

    insert = _upsert_insert(db)
    stmt = insert(Feedback).values(
        id=generate_id(),
        submission_id=submission.id,
        teacher_id=teacher.id,
        comment=comment,
        grade=grade,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["submission_id"],
        set_={
            "comment": stmt.excluded.comment,
            "grade": stmt.excluded.grade,
            "teacher_id": stmt.excluded.teacher_id,
            "updated_at": func.now(),
        },
    )

    try:
        db.execute(stmt)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Teacher %s left feedback on submission %s (grade=%s)",
        teacher.id,
        submission.id,
        grade,
    )

    return db.query(Feedback).filter(Feedback.submission_id == submission.id).one()
