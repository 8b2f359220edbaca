from classroom.db.base_class import Base

# import models so SQLAlchemy registers them on Base.metadata
from classroom.models import (  # noqa: F401
    assignment,
    course,
    feedback,
    resource,
    schedule,
    submission,
    user,
)

__all__ = ["Base"]
