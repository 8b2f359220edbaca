import logging

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from classroom.core import file_store as fs
from classroom.core.current_user import get_optional_user
from classroom.core.deps import get_db
from classroom.core.file_store import LocalFileStore, get_file_store
from classroom.models.resource import Resource, ResourceType
from classroom.models.user import User
from classroom.schemas.resource import ResourceList, ResourceOut
from classroom.services.access import authorize_student, authorize_teacher

logger = logging.getLogger(__name__)

router = APIRouter()


def _resource_row(r: Resource, store: LocalFileStore) -> dict:
    return {
        "id": r.id,
        "title": r.title,
        "type": r.type,
        "attachment": store.to_url(r.attachment),
        "created_at": r.created_at,
    }


def _list(db: Session, course_id: str, store: LocalFileStore) -> dict:
    resources = (
        db.query(Resource)
        .filter(Resource.course_id == course_id)
        .order_by(Resource.created_at.desc())
        .all()
    )
    return {"resources": [_resource_row(r, store) for r in resources]}


@router.get("/teacher/resources", response_model=ResourceList)
def list_teacher_resources(
    course_id: str = Query(alias="courseId", min_length=1),
    db: Session = Depends(get_db),
    me: User | None = Depends(get_optional_user),
    store: LocalFileStore = Depends(get_file_store),
):
    course = authorize_teacher(db, me, course_id)
    return _list(db, course.id, store)


@router.post(
    "/teacher/resources",
    response_model=ResourceOut,
    status_code=status.HTTP_201_CREATED,
)
def create_resource(
    course_id: str = Form(alias="courseId", min_length=1),
    title: str = Form(min_length=1, max_length=255),
    type: ResourceType = Form(),
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    me: User | None = Depends(get_optional_user),
    store: LocalFileStore = Depends(get_file_store),
):
    course = authorize_teacher(db, me, course_id)

    key = store.upload(file, fs.RESOURCES)
    resource = Resource(course_id=course.id, title=title, type=type, attachment=key)
    db.add(resource)
    db.commit()
    db.refresh(resource)

    logger.info("Teacher %s added %s resource %s to course %s", me.id, type.value, resource.id, course.id)
    return _resource_row(resource, store)


@router.get("/student/resources", response_model=ResourceList)
def list_student_resources(
    course_id: str = Query(alias="courseId", min_length=1),
    db: Session = Depends(get_db),
    me: User | None = Depends(get_optional_user),
    store: LocalFileStore = Depends(get_file_store),
):
    course = authorize_student(db, me, course_id)
    return _list(db, course.id, store)
