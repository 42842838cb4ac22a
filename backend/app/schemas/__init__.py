"""
Pydantic Schemas Module
Contains request/response schemas for API validation and serialization.

Pydantic schemas are used for:
- Validating incoming request data
- Serializing database models to JSON responses
- Auto-generating OpenAPI documentation
"""

from app.schemas.user import (
    UserCreate,
    UserUpdate,
    UserResponse,
    TokenPayload,
)
from app.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryThumbUpdate,
    CategoryResponse,
    CategoriesResponse,
)
from app.schemas.project import (
    ProjectSortField,
    ProjectCreate,
    ProjectUpdate,
    ProjectCreated,
    ProjectName,
    ProjectListItem,
    ProjectDetail,
    MessageResponse,
)
from app.schemas.media import (
    VideoCreate,
    VideoResponse,
    ImageCreate,
    ImageResponse,
    CleanupResponse,
)

__all__ = [
    # User schemas
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "TokenPayload",
    # Category schemas
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryThumbUpdate",
    "CategoryResponse",
    "CategoriesResponse",
    # Project schemas
    "ProjectSortField",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectCreated",
    "ProjectName",
    "ProjectListItem",
    "ProjectDetail",
    "MessageResponse",
    # Media schemas
    "VideoCreate",
    "VideoResponse",
    "ImageCreate",
    "ImageResponse",
    "CleanupResponse",
]
