from fastapi import Depends

from classroom.core.current_user import get_optional_user
from classroom.models.user import User, UserRole
from classroom.services.access import require_role


def require_teacher(current_user: User | None = Depends(get_optional_user)) -> User:
    return require_role(current_user, UserRole.TEACHER)


def require_student(current_user: User | None = Depends(get_optional_user)) -> User:
    return require_role(current_user, UserRole.STUDENT)
