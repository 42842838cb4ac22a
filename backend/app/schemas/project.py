"""
Project Schemas
Pydantic models for Project API request/response validation.

The listing responses are projections: they expose only the author,
category and thumbnail fields needed to render a project card.
"""

import enum
from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
from datetime import datetime

from app.core.constants import PROJECT_NAME_LENGTH


class ProjectSortField(str, enum.Enum):
    """Columns a project listing can be ordered by."""
    NAME = "name"
    RATING = "rating"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


# ============================================================================
# Requests
# ============================================================================

class ProjectCreate(BaseModel):
    """
    Schema for creating a project.

    The author is the authenticated user, never part of the payload.

    Example:
        {
            "name": "Brand film",
            "description": "30s spot for a local roaster",
            "category_id_list": ["6f1c..."]
        }
    """
    name: str = Field(..., min_length=1, max_length=PROJECT_NAME_LENGTH)
    description: str = Field("", description="Free text description")
    category_id_list: list[UUID] = Field(
        default_factory=list,
        description="Categories the project belongs to (at least one)"
    )


class ProjectUpdate(BaseModel):
    """
    Schema for updating a project.

    A non-empty category_id_list replaces all current categories.
    An empty or missing list leaves them unchanged.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=PROJECT_NAME_LENGTH)
    description: Optional[str] = None
    rating: Optional[int] = None
    category_id_list: Optional[list[UUID]] = None


# ============================================================================
# Responses
# ============================================================================

class AuthorSummary(BaseModel):
    id: UUID
    name: str
    avatar: Optional[str] = None

    model_config = {"from_attributes": True}


class CategorySummary(BaseModel):
    id: UUID
    name: str
    link: str

    model_config = {"from_attributes": True}


class MediaRef(BaseModel):
    """Only the id is exposed; files are fetched through /videos or /images."""
    id: UUID

    model_config = {"from_attributes": True}


class ProjectCreated(BaseModel):
    id: UUID
    name: str


class ProjectName(BaseModel):
    id: UUID
    name: str

    model_config = {"from_attributes": True}


class ProjectListItem(BaseModel):
    """Card projection used by every listing endpoint."""
    id: UUID
    name: str
    description: str
    rating: int
    created_at: datetime
    updated_at: datetime
    author: AuthorSummary
    categories: list[CategorySummary]
    thumb: Optional[MediaRef] = None

    model_config = {"from_attributes": True}


class ProjectDetail(ProjectListItem):
    """Detail projection, adds the video and gallery."""
    video: Optional[MediaRef] = None
    images: list[MediaRef] = []


class MessageResponse(BaseModel):
    message: str
