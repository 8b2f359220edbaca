from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from classroom.core.deps import get_db
from classroom.core.errors import AuthenticationError
from classroom.core.security import decode_access_token
from classroom.models.user import User

# auto_error=False so a missing header goes through our own 401 envelope
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def get_optional_user(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User | None:
    if not token:
        return None

    payload = decode_access_token(token)
    if not payload or not payload.get("sub"):
        return None

    return db.get(User, payload["sub"])


def get_current_user(user: User | None = Depends(get_optional_user)) -> User:
    # no session, expired session and unknown user all look the same
    if user is None:
        raise AuthenticationError()
    return user
