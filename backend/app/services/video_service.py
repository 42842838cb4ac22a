"""
Video Service - Business Logic Layer
Registers stored video files and attaches them to projects.

The bytes are written under MEDIA_ROOT by the upload service before a
video is registered here.
"""

import logging
import mimetypes
import os
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.constants import VIDEO_EXTENSIONS
from app.core.exceptions import BadRequestError, NotFoundError
from app.models.category import Category
from app.models.project import Project
from app.models.video import Video
from app.schemas.media import VideoCreate
from app.services.file_storage import FileStorage
from app.services.project_service import ProjectService


logger = logging.getLogger(__name__)


class VideoService:

    def __init__(self, db: Session, project_service: ProjectService, storage: FileStorage):
        self.db = db
        self.project_service = project_service
        self.storage = storage

    def create_video(self, data: VideoCreate) -> Video:
        """
        Register a stored video file.

        With project_id the video becomes that project's video; the one it
        replaces is deleted along with its file.

        Raises:
            BadRequestError: Path outside the media root, missing file or
                unsupported extension
            NotFoundError: project_id doesn't exist
        """
        resolved = self.storage.resolve(data.file_path)
        if resolved.suffix.lower() not in VIDEO_EXTENSIONS:
            raise BadRequestError("Unsupported video type", {"extension": resolved.suffix})
        if not resolved.is_file():
            raise BadRequestError("File not found in media directory", {"path": data.file_path})

        project = None
        if data.project_id is not None:
            project = self.project_service.get_project(data.project_id)

        video = Video(
            file_path=str(resolved),
            mime_type=data.mime_type or mimetypes.guess_type(resolved.name)[0],
        )
        self.db.add(video)

        old_path = None
        if project is not None:
            previous = project.video
            project.video = video
            if previous is not None:
                old_path = previous.file_path
                self.db.delete(previous)

        self.db.commit()
        self.db.refresh(video)
        logger.info(f"Video {video.id} registered ({video.file_path})")

        if old_path:
            self.storage.remove_many([old_path])

        return video

    def get_video(self, video_id: UUID) -> Video:
        video = self.db.query(Video).filter(Video.id == video_id).first()
        if not video:
            raise NotFoundError("Video not found", {"video_id": str(video_id)})
        return video

    def get_video_file(self, video_id: UUID) -> Video:
        """Get a video whose file is present on disk."""
        video = self.get_video(video_id)
        if not os.path.isfile(video.file_path):
            raise NotFoundError("Video file not found", {"video_id": str(video_id)})
        return video

    def delete_video(self, video_id: UUID) -> str:
        """Delete a video row, detach it from its owner, then remove the file."""
        video = self.get_video(video_id)
        path = video.file_path

        self.db.query(Project).filter(Project.video_id == video_id).update(
            {"video_id": None}, synchronize_session="fetch"
        )
        self.db.query(Category).filter(Category.video_thumb_id == video_id).update(
            {"video_thumb_id": None}, synchronize_session="fetch"
        )
        self.db.delete(video)
        self.db.commit()

        self.storage.remove_many([path])
        return "Video has deleted"

    def owner_id(self, video_id: UUID) -> Optional[UUID]:
        """User owning the video: the project author or the category creator."""
        project = self.db.query(Project).filter(Project.video_id == video_id).first()
        if project is not None:
            return project.author_id
        category = self.db.query(Category).filter(Category.video_thumb_id == video_id).first()
        if category is not None:
            return category.user_id
        return None

    def list_paths(self) -> set[str]:
        return {row.file_path for row in self.db.query(Video.file_path).all()}
