"""
Media Schemas
Pydantic models for registering and describing stored videos and images.

Files are written to MEDIA_ROOT by the upload service; these endpoints only
record where they are and which project they belong to.
"""

from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
from datetime import datetime


class VideoCreate(BaseModel):
    file_path: str = Field(..., min_length=1, max_length=500, description="Path of the stored file")
    mime_type: Optional[str] = Field(None, max_length=100)
    project_id: Optional[UUID] = Field(None, description="Attach as this project's video")


class VideoResponse(BaseModel):
    id: UUID
    file_path: str
    mime_type: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class ImageCreate(BaseModel):
    path: str = Field(..., min_length=1, max_length=500, description="Path of the stored file")
    project_id: Optional[UUID] = Field(None, description="Project the image belongs to")
    is_thumb: bool = Field(False, description="Use as the project's thumbnail instead of a gallery image")


class ImageResponse(BaseModel):
    id: UUID
    path: str
    project_id: Optional[UUID] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class CleanupResponse(BaseModel):
    removed: list[str]
    failed: list[str]
