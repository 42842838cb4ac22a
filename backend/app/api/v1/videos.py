"""
Videos API Endpoints
Register stored video files, serve them and delete them.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse
from uuid import UUID

from app.api.v1.deps import get_current_user, get_video_service
from app.api.v1.projects import ensure_author
from app.models.user import User
from app.schemas.media import VideoCreate, VideoResponse
from app.schemas.project import MessageResponse
from app.services.video_service import VideoService


router = APIRouter(prefix="/videos")


@router.post("", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
def create_video(
    data: VideoCreate,
    video_service: VideoService = Depends(get_video_service),
    current_user: User = Depends(get_current_user),
):
    """Register a video already stored under the media directory."""
    if data.project_id is not None:
        ensure_author(video_service.project_service, data.project_id, current_user)
    return video_service.create_video(data)


@router.get("/{video_id}", response_model=VideoResponse)
def get_video(
    video_id: UUID,
    video_service: VideoService = Depends(get_video_service),
):
    return video_service.get_video(video_id)


@router.get("/{video_id}/file")
def get_video_file(
    video_id: UUID,
    video_service: VideoService = Depends(get_video_service),
):
    """Serve the video file (supports range requests)."""
    video = video_service.get_video_file(video_id)
    return FileResponse(video.file_path, media_type=video.mime_type or "video/mp4")


@router.delete("/{video_id}", response_model=MessageResponse)
def delete_video(
    video_id: UUID,
    video_service: VideoService = Depends(get_video_service),
    current_user: User = Depends(get_current_user),
):
    """Delete a video row and its file."""
    video_service.get_video(video_id)
    owner_id = video_service.owner_id(video_id)
    if owner_id is not None and owner_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the owner can delete this video"
        )
    return MessageResponse(message=video_service.delete_video(video_id))
