from datetime import datetime

from classroom.models.resource import ResourceType
from classroom.schemas.base import CamelModel


class ResourceRead(CamelModel):
    id: str
    title: str
    type: ResourceType
    attachment: str
    created_at: datetime


class ResourceOut(ResourceRead):
    success: bool = True


class ResourceList(CamelModel):
    success: bool = True
    resources: list[ResourceRead]
