"""
Category Service - Business Logic Layer
Handles category management and category lookups used by projects.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, NotFoundError
from app.models.category import Category
from app.models.project import Project
from app.models.video import Video
from app.schemas.category import CategoryCreate, CategoryUpdate
from app.services.file_storage import FileStorage
from app.services.user_service import UserService


logger = logging.getLogger(__name__)


class CategoryService:
    """
    Service class for category-related business logic.

    Args:
        db: Database session for the current request
        user_service: Resolves the category owner
        storage: Removes the background video file on delete
    """

    def __init__(self, db: Session, user_service: UserService, storage: FileStorage):
        self.db = db
        self.user_service = user_service
        self.storage = storage

    def _check_unique(self, name: Optional[str], link: Optional[str], exclude_id: Optional[UUID] = None) -> None:
        """Raise BadRequestError if another category already uses name or link."""
        conditions = []
        if name is not None:
            conditions.append(Category.name == name)
        if link is not None:
            conditions.append(Category.link == link)
        if not conditions:
            return

        query = self.db.query(Category).filter(or_(*conditions))
        if exclude_id is not None:
            query = query.filter(Category.id != exclude_id)
        existing = query.first()
        if existing:
            field = "name" if existing.name == name else "link"
            raise BadRequestError(f"A category with this {field} already exists", {"field": field})

    def create_category(self, data: CategoryCreate, user_id: UUID) -> Category:
        """
        Create a new category owned by user_id.

        Raises:
            BadRequestError: If the owner doesn't exist or name/link is taken
        """
        if not self.user_service.find_one_by_id(user_id):
            raise BadRequestError("Not found user")

        name = data.name.strip()
        self._check_unique(name, data.link)

        category = Category(
            name=name,
            link=data.link,
            description=data.description.strip(),
            user_id=user_id,
        )
        self.db.add(category)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise BadRequestError("A category with this name or link already exists")

        self.db.refresh(category)
        return category

    def get_one_by_id(self, category_id: UUID) -> Optional[Category]:
        return self.db.query(Category).filter(Category.id == category_id).first()

    def get_category(self, category_id: UUID) -> Category:
        category = self.get_one_by_id(category_id)
        if not category:
            raise NotFoundError("Category not found", {"category_id": str(category_id)})
        return category

    def get_by_link(self, link: str) -> Category:
        category = self.db.query(Category).filter(Category.link == link).first()
        if not category:
            raise NotFoundError("Category not found", {"link": link})
        return category

    def get_list_category(self) -> list[Category]:
        return self.db.query(Category).order_by(Category.name.asc()).all()

    def resolve_category_list(self, category_ids: list[UUID]) -> list[Category]:
        """
        Load every category in category_ids.

        All ids are looked up in one query; the result is only returned if
        every id resolved.

        Raises:
            NotFoundError: If the list is empty or any id is unknown
        """
        wanted = list(dict.fromkeys(category_ids))
        if not wanted:
            raise NotFoundError("Not found category")

        found = self.db.query(Category).filter(Category.id.in_(wanted)).all()
        by_id = {category.id: category for category in found}
        missing = [str(category_id) for category_id in wanted if category_id not in by_id]
        if missing:
            raise NotFoundError("Not found category", {"category_ids": missing})

        return [by_id[category_id] for category_id in wanted]

    def update_category(self, category_id: UUID, data: CategoryUpdate) -> Category:
        category = self.get_category(category_id)

        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in update_data:
            update_data["name"] = update_data["name"].strip()
        if "description" in update_data:
            update_data["description"] = update_data["description"].strip()

        self._check_unique(update_data.get("name"), update_data.get("link"), exclude_id=category.id)

        for field, value in update_data.items():
            setattr(category, field, value)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise BadRequestError("A category with this name or link already exists")

        self.db.refresh(category)
        return category

    def set_video_thumb(self, category_id: UUID, video_id: UUID) -> Category:
        """
        Attach a background video to a category.

        A previous background video is deleted together with its file.
        A video that presents a project can't be claimed.
        """
        category = self.get_category(category_id)
        video = self.db.query(Video).filter(Video.id == video_id).first()
        if not video:
            raise NotFoundError("Video not found", {"video_id": str(video_id)})

        previous = category.video_thumb
        if previous is not None and previous.id == video.id:
            return category

        taken = self.db.query(Category).filter(
            Category.video_thumb_id == video.id,
            Category.id != category.id
        ).first()
        if taken:
            raise BadRequestError("Video is already used by another category")

        in_project = self.db.query(Project).filter(Project.video_id == video.id).first()
        if in_project:
            raise BadRequestError(
                "Video is already used by a project",
                {"project_id": str(in_project.id)}
            )

        category.video_thumb = video
        old_path = None
        if previous is not None:
            old_path = previous.file_path
            self.db.delete(previous)

        self.db.commit()
        if old_path:
            self.storage.remove_many([old_path])

        self.db.refresh(category)
        return category

    def delete_category(self, category_id: UUID) -> str:
        """
        Delete a category, its background video row and the video file.

        Project associations are removed with the category row.
        """
        category = self.get_category(category_id)
        name = category.name
        video = category.video_thumb
        video_path = video.file_path if video is not None else None

        self.db.delete(category)
        if video is not None:
            self.db.delete(video)
        self.db.commit()

        if video_path:
            failed = self.storage.remove_many([video_path])
            if failed:
                logger.warning(f"Category {category_id} deleted but file {video_path} is still on disk")

        return f"Category {name} has deleted"
