"""
Project Service - Business Logic Layer
Handles project CRUD and the paginated, sorted project listings.

Listings return a card projection: project scalars, the author's
name/id/avatar, each category's name/link/id and the thumbnail id.
Only those columns are loaded from the database.

Deletion order:
1. Remove the project row and the video/image rows it owns (one commit)
2. Remove the files behind them, best effort
A file that cannot be removed is logged and left to the orphan sweep;
a row is never left pointing at a file that has already been deleted.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, Query, joinedload, selectinload, load_only

from app.core.constants import NAME_SUGGESTION_LIMIT
from app.core.exceptions import BadRequestError, NotFoundError, ServerError
from app.models.category import Category
from app.models.image import Image
from app.models.project import Project
from app.models.user import User
from app.models.video import Video
from app.schemas.project import ProjectCreate, ProjectUpdate, ProjectSortField
from app.services.category_service import CategoryService
from app.services.file_storage import FileStorage
from app.services.user_service import UserService


logger = logging.getLogger(__name__)


# Sort field -> column
SORT_COLUMNS = {
    ProjectSortField.NAME: Project.name,
    ProjectSortField.RATING: Project.rating,
    ProjectSortField.CREATED_AT: Project.created_at,
    ProjectSortField.UPDATED_AT: Project.updated_at,
}


def like_pattern(text: str) -> str:
    """Build a substring LIKE pattern, escaping wildcards typed by the user."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ProjectService:
    """
    Service class for project-related business logic.

    Args:
        db: Database session for the current request
        user_service: Resolves project authors
        category_service: Resolves category id lists
        storage: Removes media files of deleted projects
    """

    def __init__(
        self,
        db: Session,
        user_service: UserService,
        category_service: CategoryService,
        storage: FileStorage
    ):
        self.db = db
        self.user_service = user_service
        self.category_service = category_service
        self.storage = storage

    # ------------------------------------------------------------------
    # Query building
    # ------------------------------------------------------------------

    def _card_query(self) -> Query:
        """Base query loading only the columns of the card projection."""
        return self.db.query(Project).options(
            load_only(
                Project.id,
                Project.name,
                Project.description,
                Project.rating,
                Project.created_at,
                Project.updated_at,
            ),
            joinedload(Project.author).load_only(User.id, User.name, User.avatar),
            selectinload(Project.categories).load_only(Category.id, Category.name, Category.link),
            joinedload(Project.thumb).load_only(Image.id),
        )

    @staticmethod
    def _paginate(
        query: Query,
        page: int,
        page_size: int,
        sort_field: ProjectSortField,
        descending: bool
    ) -> list[Project]:
        column = SORT_COLUMNS[ProjectSortField(sort_field)]
        skip = page * page_size
        return (
            query
            .order_by(column.desc() if descending else column.asc(), Project.id.asc())
            .offset(skip)
            .limit(page_size)
            .all()
        )

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def find_one_by_id(self, project_id: UUID) -> Optional[Project]:
        return self.db.query(Project).filter(Project.id == project_id).first()

    def get_project(self, project_id: UUID) -> Project:
        project = self.find_one_by_id(project_id)
        if not project:
            raise NotFoundError("Not Found project", {"project_id": str(project_id)})
        return project

    def create_project(self, project_dto: ProjectCreate, author_id: UUID) -> dict:
        """
        Create a project authored by author_id.

        Steps:
        1. Resolve the author
        2. Resolve every category id (all or nothing)
        3. Persist the project with trimmed name and description

        Returns:
            {"id": ..., "name": ...}

        Raises:
            BadRequestError: Author doesn't exist or name is blank
            NotFoundError: Category list empty or an id is unknown
            ServerError: The insert failed
        """
        author = self.user_service.find_one_by_id(author_id)
        if not author:
            raise BadRequestError("Not found author")

        categories = self.category_service.resolve_category_list(project_dto.category_id_list)

        name = project_dto.name.strip()
        if not name:
            raise BadRequestError("Project name is required")

        project = Project(
            author=author,
            categories=categories,
            name=name,
            description=project_dto.description.strip(),
        )
        self.db.add(project)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create project '{name}': {e}")
            raise ServerError("Server error")

        logger.info(f"Project {project.id} created by {author_id}")
        return {"id": project.id, "name": project.name}

    def get_list_project(
        self,
        page: int,
        page_size: int,
        sort_field: ProjectSortField,
        descending: bool
    ) -> list[Project]:
        """Page of project cards ordered by sort_field."""
        return self._paginate(self._card_query(), page, page_size, sort_field, descending)

    def get_detail_project(self, project_id: UUID) -> Project:
        """
        Get one project with author, video, thumbnail, gallery and categories.

        Raises:
            NotFoundError: If the project doesn't exist or the lookup failed
        """
        try:
            project = (
                self.db.query(Project)
                .options(
                    joinedload(Project.author).load_only(User.id, User.name, User.avatar),
                    joinedload(Project.video).load_only(Video.id),
                    joinedload(Project.thumb).load_only(Image.id),
                    selectinload(Project.images).load_only(Image.id),
                    selectinload(Project.categories).load_only(Category.id, Category.name, Category.link),
                )
                .filter(Project.id == project_id)
                .first()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Project {project_id} lookup failed: {e}")
            raise NotFoundError("Not Found project", {"project_id": str(project_id)})

        if not project:
            raise NotFoundError("Not Found project", {"project_id": str(project_id)})
        return project

    def delete_project(self, project_id: UUID) -> str:
        """
        Delete a project, the media rows it owns and their files.

        Returns:
            Confirmation message with the project name

        Raises:
            NotFoundError: If the project doesn't exist
            ServerError: If the rows could not be removed (no file is touched)
        """
        project = (
            self.db.query(Project)
            .options(
                joinedload(Project.video),
                joinedload(Project.thumb),
                selectinload(Project.images),
            )
            .filter(Project.id == project_id)
            .first()
        )
        if not project:
            raise NotFoundError("Not Found project", {"project_id": str(project_id)})

        name = project.name
        video = project.video
        thumb = project.thumb

        paths = []
        if video is not None:
            paths.append(video.file_path)
        if thumb is not None:
            paths.append(thumb.path)
        paths.extend(image.path for image in project.images)

        try:
            # Gallery images go with the project (delete-orphan cascade)
            self.db.delete(project)
            if video is not None:
                self.db.delete(video)
            if thumb is not None:
                self.db.delete(thumb)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete project {project_id}: {e}")
            raise ServerError("Server error", {"project_id": str(project_id)})

        failed = self.storage.remove_many(paths)
        if failed:
            logger.warning(f"Project {project_id} deleted, {len(failed)} file(s) left for cleanup")

        return f"Project {name} has deleted"

    def delete_projects_by_author(self, author_id: UUID) -> int:
        """Delete every project of an author (files included). Returns the count."""
        project_ids = [
            row.id for row in
            self.db.query(Project.id).filter(Project.author_id == author_id).all()
        ]
        for project_id in project_ids:
            self.delete_project(project_id)
        return len(project_ids)

    def update_project(self, project_id: UUID, project_update: ProjectUpdate) -> str:
        """
        Update a project.

        A non-empty category_id_list replaces the current categories; every id
        must resolve. Other provided fields are merged in.

        Raises:
            NotFoundError: Project or one of the categories doesn't exist
            BadRequestError: Name is blank after trimming
            ServerError: The update failed
        """
        project = (
            self.db.query(Project)
            .options(selectinload(Project.categories))
            .filter(Project.id == project_id)
            .first()
        )
        if not project:
            raise NotFoundError("Not Found project", {"project_id": str(project_id)})

        update_data = project_update.model_dump(exclude_unset=True)
        category_ids = update_data.pop("category_id_list", None)

        if category_ids:
            project.categories = self.category_service.resolve_category_list(category_ids)

        for field, value in update_data.items():
            if value is None:
                continue
            if isinstance(value, str):
                value = value.strip()
            if field == "name" and not value:
                self.db.rollback()
                raise BadRequestError("Project name is required")
            setattr(project, field, value)

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to update project {project_id}: {e}")
            raise ServerError("Server error", {"project_id": str(project_id)})

        return f"Project {project.name} was updated"

    # ------------------------------------------------------------------
    # Search and filtered listings
    # ------------------------------------------------------------------

    def get_name_project(self, txt_search: str) -> list[Project]:
        """Typeahead: up to 5 projects whose name contains txt_search (any case)."""
        return (
            self.db.query(Project)
            .options(load_only(Project.id, Project.name))
            .filter(Project.name.ilike(like_pattern(txt_search), escape="\\"))
            .order_by(Project.name.asc())
            .limit(NAME_SUGGESTION_LIMIT)
            .all()
        )

    def get_project_by_name(self, name: str) -> list[Project]:
        """Project cards whose name contains name, by name then newest first."""
        return (
            self._card_query()
            .filter(Project.name.ilike(like_pattern(name), escape="\\"))
            .order_by(Project.name.asc(), Project.created_at.desc())
            .all()
        )

    def get_list_project_by_user_id(
        self,
        user_id: UUID,
        page: int,
        page_size: int,
        sort_field: ProjectSortField,
        descending: bool
    ) -> list[Project]:
        query = self._card_query().filter(Project.author_id == user_id)
        return self._paginate(query, page, page_size, sort_field, descending)

    def get_list_project_by_category(
        self,
        category_link: str,
        page: int,
        page_size: int,
        sort_field: ProjectSortField,
        descending: bool
    ) -> list[Project]:
        # any() keeps every category of a matching project in the projection
        query = self._card_query().filter(
            Project.categories.any(Category.link == category_link)
        )
        return self._paginate(query, page, page_size, sort_field, descending)
