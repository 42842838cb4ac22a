"""
Image Model
An image file stored under MEDIA_ROOT.

An image with project_id set belongs to that project's gallery.
Thumbnails are referenced from Project.thumb_id and keep project_id empty.
"""

from sqlalchemy import Column, String, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from app.models.base import BaseModel


class Image(BaseModel):
    __tablename__ = "images"

    # Absolute path of the stored file
    path = Column(String(500), nullable=False)

    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )

    # Relationships
    project = relationship("Project", back_populates="images", foreign_keys=[project_id])

    def __repr__(self):
        return f"<Image(id={self.id}, path='{self.path}')>"
