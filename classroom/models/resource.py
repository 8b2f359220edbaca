import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, func
from sqlalchemy.orm import relationship

from classroom.db.base_class import Base, generate_id


class ResourceType(str, enum.Enum):
    PDF_DOCUMENT = "PDF_DOCUMENT"
    VIDEO_CLASS = "VIDEO_CLASS"
    IMAGE = "IMAGE"


class Resource(Base):
    __tablename__ = "resources"

    id = Column(String(36), primary_key=True, default=generate_id)
    course_id = Column(String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    type = Column(Enum(ResourceType, name="resource_type"), nullable=False)
    attachment = Column(String(2048), nullable=False)  # file store key

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    course = relationship("Course", back_populates="resources")
