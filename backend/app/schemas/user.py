"""
User Pydantic Schemas
Request and response models for user-related endpoints.

These schemas define the structure of data sent to and received from the API.
They provide automatic validation, serialization, and documentation.
"""

from pydantic import BaseModel, EmailStr, Field, ConfigDict
from typing import Optional
from uuid import UUID
from datetime import datetime


class UserCreate(BaseModel):
    """
    Schema for user creation request.

    Used in POST /api/v1/users.

    Example:
        {
            "name": "Jane Doe",
            "email": "jane@example.com",
            "password": "SecurePass123!"
        }
    """
    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Display name",
        examples=["Jane Doe"]
    )
    email: EmailStr = Field(
        ...,
        description="Valid email address used as login identifier",
        examples=["jane@example.com"]
    )
    password: str = Field(
        ...,
        min_length=8,
        max_length=72,  # bcrypt ignores anything past 72 bytes
        description="Password (minimum 8 characters)"
    )
    avatar: Optional[str] = Field(
        None,
        max_length=500,
        description="Path or URL of the profile picture"
    )


class UserUpdate(BaseModel):
    """
    Schema for profile update request.

    Only provided fields are updated.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    avatar: Optional[str] = Field(None, max_length=500)


class UserResponse(BaseModel):
    """
    Schema for user profile response.

    Never includes password_hash.
    """
    id: UUID
    name: str
    email: EmailStr
    avatar: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TokenPayload(BaseModel):
    """
    Decoded JWT payload.

    Attributes:
        sub: User id (as string)
        exp: Expiration timestamp
        type: Token type, only "access" tokens are accepted by the API
    """
    sub: str
    exp: int
    type: str
