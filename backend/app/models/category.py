"""
Category Model
Groups projects by theme (e.g., "Motion", "Branding", "3D").

Each category is reachable through a short unique link used in front-end
URLs, and may carry a background video shown on its landing section.
"""

from sqlalchemy import Column, String, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from app.core.constants import (
    CATEGORY_NAME_LENGTH,
    CATEGORY_LINK_LENGTH,
    CATEGORY_DESCRIPTION_LENGTH,
)
from app.models.base import BaseModel


class Category(BaseModel):
    """
    Category Model

    Name and link are both unique across all categories.
    The thumbnail video is owned by the category: deleting the category
    deletes the video row and its file.
    """
    __tablename__ = "categories"

    name = Column(String(CATEGORY_NAME_LENGTH), unique=True, nullable=False)

    # Short slug used in URLs (e.g., "motion")
    link = Column(String(CATEGORY_LINK_LENGTH), unique=True, nullable=False, index=True)

    description = Column(String(CATEGORY_DESCRIPTION_LENGTH), nullable=False, default="")

    # Who created this category
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Optional one-to-one background video
    video_thumb_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("videos.id", ondelete="SET NULL"),
        nullable=True,
        unique=True
    )

    # Relationships
    user = relationship("User", back_populates="categories")
    video_thumb = relationship("Video", foreign_keys=[video_thumb_id])
    projects = relationship(
        "Project",
        secondary="project_categories",
        back_populates="categories"
    )

    def __repr__(self):
        return f"<Category(id={self.id}, name='{self.name}', link='{self.link}')>"
