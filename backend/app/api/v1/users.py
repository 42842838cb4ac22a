"""
User Endpoints
Handles account creation and profile management.

Endpoints:
- POST /users - Create an account
- GET /users/me - Get current user profile
- PUT /users/me - Update current user profile
- DELETE /users/me - Delete current user with all their projects
- GET /users/{user_id} - Public profile of an author
"""

from fastapi import APIRouter, Depends, status
from uuid import UUID

from app.api.v1.deps import get_current_user, get_user_service, get_project_service
from app.models.user import User
from app.schemas.project import MessageResponse
from app.schemas.user import UserCreate, UserUpdate, UserResponse
from app.services.project_service import ProjectService
from app.services.user_service import UserService


# Create router for user endpoints
# This router will be included in the main app with prefix /api/v1/users
router = APIRouter()


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    responses={400: {"description": "Email already registered"}}
)
def create_user(
    data: UserCreate,
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    """Create a user account. The password is stored as a bcrypt hash."""
    return user_service.create_user(data)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user profile",
    responses={401: {"description": "Not authenticated or invalid token"}}
)
def get_current_user_profile(
    current_user: User = Depends(get_current_user)
) -> UserResponse:
    """Return the profile of the authenticated user."""
    return current_user


@router.put(
    "/me",
    response_model=UserResponse,
    summary="Update current user profile",
    responses={
        401: {"description": "Not authenticated or invalid token"},
        422: {"description": "Validation error (invalid data)"}
    }
)
def update_current_user_profile(
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    """Update name and/or avatar. Only provided fields change."""
    return user_service.update_user(current_user.id, data)


@router.delete(
    "/me",
    response_model=MessageResponse,
    summary="Delete current user"
)
def delete_current_user(
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
    project_service: ProjectService = Depends(get_project_service)
):
    """
    Delete the authenticated user.

    Projects are deleted first so their media files are removed from disk.
    """
    user_id = current_user.id
    project_service.delete_projects_by_author(user_id)
    return MessageResponse(message=user_service.delete_user(user_id))


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user profile",
    responses={404: {"description": "User not found"}}
)
def get_user(
    user_id: UUID,
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    return user_service.get_user(user_id)
