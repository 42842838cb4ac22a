"""
Image Service - Business Logic Layer
Registers stored images as project thumbnails or gallery images.
"""

import logging
import os
from typing import Optional
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.constants import IMAGE_EXTENSIONS
from app.core.exceptions import BadRequestError, NotFoundError
from app.models.image import Image
from app.models.project import Project
from app.schemas.media import ImageCreate
from app.services.file_storage import FileStorage
from app.services.project_service import ProjectService


logger = logging.getLogger(__name__)


class ImageService:

    def __init__(self, db: Session, project_service: ProjectService, storage: FileStorage):
        self.db = db
        self.project_service = project_service
        self.storage = storage

    def create_image(self, data: ImageCreate) -> Image:
        """
        Register a stored image.

        - is_thumb with project_id: becomes the project's thumbnail; the
          previous thumbnail is deleted with its file
        - project_id only: appended to the project's gallery
        - neither: standalone image (e.g., an avatar)
        """
        resolved = self.storage.resolve(data.path)
        if resolved.suffix.lower() not in IMAGE_EXTENSIONS:
            raise BadRequestError("Unsupported image type", {"extension": resolved.suffix})
        if not resolved.is_file():
            raise BadRequestError("File not found in media directory", {"path": data.path})
        if data.is_thumb and data.project_id is None:
            raise BadRequestError("A thumbnail needs a project_id")

        project = None
        if data.project_id is not None:
            project = self.project_service.get_project(data.project_id)

        image = Image(path=str(resolved))
        self.db.add(image)

        old_path = None
        if project is not None and data.is_thumb:
            previous = project.thumb
            project.thumb = image
            if previous is not None:
                old_path = previous.path
                self.db.delete(previous)
        elif project is not None:
            image.project = project

        self.db.commit()
        self.db.refresh(image)
        logger.info(f"Image {image.id} registered ({image.path})")

        if old_path:
            self.storage.remove_many([old_path])

        return image

    def get_image(self, image_id: UUID) -> Image:
        image = self.db.query(Image).filter(Image.id == image_id).first()
        if not image:
            raise NotFoundError("Image not found", {"image_id": str(image_id)})
        return image

    def get_image_file(self, image_id: UUID) -> Image:
        """Get an image whose file is present on disk."""
        image = self.get_image(image_id)
        if not os.path.isfile(image.path):
            raise NotFoundError("Image file not found", {"image_id": str(image_id)})
        return image

    def delete_image(self, image_id: UUID) -> str:
        """Delete an image row (clearing thumbnail references), then the file."""
        image = self.get_image(image_id)
        path = image.path

        self.db.query(Project).filter(Project.thumb_id == image_id).update(
            {"thumb_id": None}, synchronize_session="fetch"
        )
        self.db.delete(image)
        self.db.commit()

        self.storage.remove_many([path])
        return "Image has deleted"

    def owner_id(self, image_id: UUID) -> Optional[UUID]:
        """Author of the project the image belongs to (gallery or thumbnail)."""
        project = self.db.query(Project).filter(
            or_(Project.thumb_id == image_id, Project.images.any(Image.id == image_id))
        ).first()
        return project.author_id if project is not None else None

    def list_paths(self) -> set[str]:
        return {row.path for row in self.db.query(Image.path).all()}
