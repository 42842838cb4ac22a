"""
Images API Endpoints
Register stored images (thumbnails and gallery), serve them and delete them.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse
from uuid import UUID

from app.api.v1.deps import get_current_user, get_image_service
from app.api.v1.projects import ensure_author
from app.models.user import User
from app.schemas.media import ImageCreate, ImageResponse
from app.schemas.project import MessageResponse
from app.services.image_service import ImageService


router = APIRouter(prefix="/images")


@router.post("", response_model=ImageResponse, status_code=status.HTTP_201_CREATED)
def create_image(
    data: ImageCreate,
    image_service: ImageService = Depends(get_image_service),
    current_user: User = Depends(get_current_user),
):
    """Register an image already stored under the media directory."""
    if data.project_id is not None:
        ensure_author(image_service.project_service, data.project_id, current_user)
    return image_service.create_image(data)


@router.get("/{image_id}", response_model=ImageResponse)
def get_image(
    image_id: UUID,
    image_service: ImageService = Depends(get_image_service),
):
    return image_service.get_image(image_id)


@router.get("/{image_id}/file")
def get_image_file(
    image_id: UUID,
    image_service: ImageService = Depends(get_image_service),
):
    image = image_service.get_image_file(image_id)
    return FileResponse(image.path)


@router.delete("/{image_id}", response_model=MessageResponse)
def delete_image(
    image_id: UUID,
    image_service: ImageService = Depends(get_image_service),
    current_user: User = Depends(get_current_user),
):
    """Delete an image row and its file."""
    image_service.get_image(image_id)
    owner_id = image_service.owner_id(image_id)
    if owner_id is not None and owner_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the owner can delete this image"
        )
    return MessageResponse(message=image_service.delete_image(image_id))
