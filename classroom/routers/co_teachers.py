from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from classroom.core.current_user import get_optional_user
from classroom.core.deps import get_db
from classroom.models.user import User
from classroom.schemas.base import MessageOut
from classroom.schemas.co_teacher import InviteCoTeacherOut, InviteCoTeacherRequest
from classroom.services import membership

router = APIRouter(prefix="/teacher/co-teachers")


# main teacher or any co-teacher may invite
@router.put("", response_model=InviteCoTeacherOut)
def invite_co_teacher(
    payload: InviteCoTeacherRequest,
    db: Session = Depends(get_db),
    me: User | None = Depends(get_optional_user),
):
    invitee = membership.invite_co_teacher(db, me, payload.course_id, payload.email)
    return {
        "message": f"Successfully invited {invitee.name} as co-teacher",
        "co_teacher": invitee,
    }


@router.delete("", response_model=MessageOut)
def remove_co_teacher(
    course_id: str = Query(alias="courseId", min_length=1),
    co_teacher_id: str = Query(alias="coTeacherId", min_length=1),
    db: Session = Depends(get_db),
    me: User | None = Depends(get_optional_user),
):
    membership.remove_co_teacher(db, me, course_id, co_teacher_id)
    return {"message": "Co-teacher removed successfully"}
