"""
Category Schemas
Pydantic models for Category API request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
from datetime import datetime

from app.core.constants import (
    CATEGORY_NAME_LENGTH,
    CATEGORY_LINK_LENGTH,
    CATEGORY_DESCRIPTION_LENGTH,
)

# Lowercase slug: letters, digits and dashes
LINK_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class CategoryCreate(BaseModel):
    """Schema for creating a category"""
    name: str = Field(..., min_length=1, max_length=CATEGORY_NAME_LENGTH, description="Category name")
    link: str = Field(
        ...,
        min_length=1,
        max_length=CATEGORY_LINK_LENGTH,
        pattern=LINK_PATTERN,
        description="Short unique slug used in URLs"
    )
    description: str = Field("", max_length=CATEGORY_DESCRIPTION_LENGTH, description="Category description")


class CategoryUpdate(BaseModel):
    """Schema for updating a category"""
    name: Optional[str] = Field(None, min_length=1, max_length=CATEGORY_NAME_LENGTH)
    link: Optional[str] = Field(None, min_length=1, max_length=CATEGORY_LINK_LENGTH, pattern=LINK_PATTERN)
    description: Optional[str] = Field(None, max_length=CATEGORY_DESCRIPTION_LENGTH)


class CategoryThumbUpdate(BaseModel):
    """Schema for attaching a background video to a category"""
    video_id: UUID


class CategoryResponse(BaseModel):
    """Schema for category response"""
    id: UUID
    name: str
    link: str
    description: str
    user_id: Optional[UUID] = None
    video_thumb_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CategoriesResponse(BaseModel):
    """Schema for list of categories response"""
    categories: list[CategoryResponse]
    total: int
