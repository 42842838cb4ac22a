"""
Media Files Maintenance Endpoint

POST /files/cleanup removes files under MEDIA_ROOT that no video, image
or user avatar references anymore (leftovers of deletes whose file removal
failed, or uploads that were never registered). The sweep covers every
user's files, so only admins may run it.
"""

import logging

from fastapi import APIRouter, Depends

from app.api.v1.deps import (
    get_file_storage,
    get_image_service,
    get_user_service,
    get_video_service,
    require_admin,
)
from app.core.config import settings
from app.models.user import User
from app.schemas.media import CleanupResponse
from app.services.file_storage import FileStorage
from app.services.image_service import ImageService
from app.services.user_service import UserService
from app.services.video_service import VideoService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files")


@router.post("/cleanup", response_model=CleanupResponse)
def cleanup_orphan_files(
    storage: FileStorage = Depends(get_file_storage),
    video_service: VideoService = Depends(get_video_service),
    image_service: ImageService = Depends(get_image_service),
    user_service: UserService = Depends(get_user_service),
    current_user: User = Depends(require_admin),
):
    """Sweep unreferenced media files older than ORPHAN_GRACE_SECONDS."""
    referenced = (
        video_service.list_paths()
        | image_service.list_paths()
        | user_service.list_avatar_paths()
    )
    removed, failed = storage.sweep_orphans(referenced, settings.ORPHAN_GRACE_SECONDS)
    logger.info(f"Cleanup requested by {current_user.id}: {len(removed)} removed, {len(failed)} failed")
    return CleanupResponse(removed=removed, failed=failed)
