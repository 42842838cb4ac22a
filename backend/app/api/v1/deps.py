"""
API Dependencies
Common dependencies used across API endpoints.

This module is the composition root of the application:
- Database session management
- User authentication (JWT validation)
- Service construction: each service gets the session and the services
  it depends on, once per request

Dependencies are injected into FastAPI endpoints using Depends().
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from uuid import UUID

from app.core.config import settings
from app.db.session import get_db
from app.models.user import User
from app.services.auth_service import verify_token
from app.services.category_service import CategoryService
from app.services.file_storage import FileStorage
from app.services.image_service import ImageService
from app.services.project_service import ProjectService
from app.services.user_service import UserService
from app.services.video_service import VideoService


# HTTP Bearer token scheme for JWT authentication
# Used to extract "Authorization: Bearer <token>" from request headers
security = HTTPBearer()


# ============================================================================
# Services
# ============================================================================

def get_file_storage() -> FileStorage:
    return FileStorage(settings.MEDIA_ROOT)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def get_category_service(
    db: Session = Depends(get_db),
    user_service: UserService = Depends(get_user_service),
    storage: FileStorage = Depends(get_file_storage),
) -> CategoryService:
    return CategoryService(db, user_service, storage)


def get_project_service(
    db: Session = Depends(get_db),
    user_service: UserService = Depends(get_user_service),
    category_service: CategoryService = Depends(get_category_service),
    storage: FileStorage = Depends(get_file_storage),
) -> ProjectService:
    return ProjectService(db, user_service, category_service, storage)


def get_video_service(
    db: Session = Depends(get_db),
    project_service: ProjectService = Depends(get_project_service),
    storage: FileStorage = Depends(get_file_storage),
) -> VideoService:
    return VideoService(db, project_service, storage)


def get_image_service(
    db: Session = Depends(get_db),
    project_service: ProjectService = Depends(get_project_service),
    storage: FileStorage = Depends(get_file_storage),
) -> ImageService:
    return ImageService(db, project_service, storage)


# ============================================================================
# Authentication
# ============================================================================

def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
    user_service: UserService = Depends(get_user_service)
) -> User:
    """
    Extract and validate current user from JWT token.

    This dependency:
    1. Extracts JWT token from Authorization header
    2. Validates token signature, expiration and type
    3. Loads the user named in the "sub" claim
    4. Stores it on request.state for error logging

    Raises:
        HTTPException 401: If token is invalid, expired or names no user

    Usage in endpoint:
        @router.post("/projects")
        def create(current_user: User = Depends(get_current_user)):
            ...
    """
    payload = verify_token(credentials.credentials, expected_type="access")
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"}
        )

    try:
        user_id = UUID(payload.sub)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"}
        )

    user = user_service.find_one_by_id(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"}
        )

    request.state.user = user
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Dependency that requires admin role."""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return current_user
