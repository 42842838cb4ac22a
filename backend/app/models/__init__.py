"""
Database Models Module
Contains SQLAlchemy ORM models for all database tables.

All models must be imported here to be registered with SQLAlchemy
and created during Base.metadata.create_all().
"""

from app.db.base import Base
from app.models.base import BaseModel
from app.models.user import User, UserRole
from app.models.video import Video
from app.models.image import Image
from app.models.category import Category
from app.models.project import Project, project_categories
from app.models.error_log import ErrorLog

# Export all models so they can be imported from app.models
__all__ = [
    "Base",
    "BaseModel",
    "User",
    "UserRole",
    "Video",
    "Image",
    "Category",
    "Project",
    "project_categories",
    "ErrorLog",
]
