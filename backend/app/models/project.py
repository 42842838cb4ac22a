"""
Project Model
A portfolio entry: a piece of work authored by a user.

A project belongs to one or more categories and can carry:
- one presentation video
- one thumbnail image shown on listing cards
- a gallery of images shown on the detail page

Video and image rows are owned by the project. The database only cascades
rows; the files behind them are removed by ProjectService.delete_project.
"""

from sqlalchemy import Column, String, Text, Integer, ForeignKey, Table, Uuid
from sqlalchemy.orm import relationship

from app.core.constants import PROJECT_NAME_LENGTH
from app.db.base import Base
from app.models.base import BaseModel


# Many-to-many association between projects and categories
# Rows go away with either side (ondelete CASCADE on both keys)
project_categories = Table(
    "project_categories",
    Base.metadata,
    Column(
        "project_id",
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        primary_key=True
    ),
    Column(
        "category_id",
        Uuid(as_uuid=True),
        ForeignKey("categories.id", ondelete="CASCADE"),
        primary_key=True
    ),
)


class Project(BaseModel):
    """
    Project model.

    Fields:
        id (UUID): Primary key, inherited from BaseModel
        name (str): Project title
        description (str): Free text description
        rating (int): Sort weight / score, defaults to 0
        author_id (UUID): Author of the project
        video_id (UUID): Optional presentation video
        thumb_id (UUID): Optional thumbnail image
        created_at / updated_at: inherited timestamps

    Relationships:
        author: Many-to-one with User
        categories: Many-to-many with Category through project_categories
        video: Many-to-one with Video (owned)
        thumb: Many-to-one with Image (owned)
        images: One-to-many gallery images (owned, delete-orphan)
    """

    __tablename__ = "projects"

    name = Column(String(PROJECT_NAME_LENGTH), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    rating = Column(Integer, nullable=False, default=0)

    author_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    video_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("videos.id", ondelete="SET NULL"),
        nullable=True
    )

    # projects.thumb_id -> images.id and images.project_id -> projects.id form
    # a cycle, so this key is created with ALTER after both tables exist
    thumb_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("images.id", ondelete="SET NULL", use_alter=True, name="fk_projects_thumb_id"),
        nullable=True
    )

    # Relationships
    author = relationship("User", back_populates="projects")
    categories = relationship(
        "Category",
        secondary=project_categories,
        back_populates="projects"
    )
    video = relationship("Video", foreign_keys=[video_id])
    thumb = relationship("Image", foreign_keys=[thumb_id], post_update=True)
    images = relationship(
        "Image",
        back_populates="project",
        foreign_keys="Image.project_id",
        cascade="all, delete-orphan",
        order_by="Image.created_at"
    )

    def __repr__(self):
        return f"<Project(id={self.id}, name='{self.name}')>"
