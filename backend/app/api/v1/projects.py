"""
Projects API Endpoints
CRUD, search and paginated listings for portfolio projects.

Listings take the same query parameters:
- page: zero-based page number
- page_size: projects per page (1..MAX_PAGE_SIZE)
- sort: name | rating | created_at | updated_at
- desc: descending order when true

Reads are public; create/update/delete require a bearer token and only
the author may update or delete a project.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from uuid import UUID

from app.api.v1.deps import get_current_user, get_project_service
from app.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from app.models.user import User
from app.schemas.project import (
    ProjectSortField,
    ProjectCreate,
    ProjectUpdate,
    ProjectCreated,
    ProjectName,
    ProjectListItem,
    ProjectDetail,
    MessageResponse,
)
from app.services.project_service import ProjectService


router = APIRouter(prefix="/projects")


def ensure_author(project_service: ProjectService, project_id: UUID, user: User) -> None:
    """Raise 403 unless user is the author of the project (404 if missing)."""
    project = project_service.get_project(project_id)
    if project.author_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the author can modify this project"
        )


@router.post("", response_model=ProjectCreated, status_code=status.HTTP_201_CREATED)
def create_project(
    data: ProjectCreate,
    project_service: ProjectService = Depends(get_project_service),
    current_user: User = Depends(get_current_user),
):
    """Create a project authored by the current user."""
    return project_service.create_project(data, current_user.id)


@router.get("", response_model=list[ProjectListItem])
def get_list_project(
    page: int = Query(0, ge=0, description="Zero-based page number"),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    sort: ProjectSortField = Query(ProjectSortField.CREATED_AT),
    desc: bool = Query(True, description="Descending order"),
    project_service: ProjectService = Depends(get_project_service),
):
    """Paginated project cards."""
    return project_service.get_list_project(page, page_size, sort, desc)


@router.get("/names", response_model=list[ProjectName])
def get_name_project(
    q: str = Query(..., min_length=1, description="Text contained in the name"),
    project_service: ProjectService = Depends(get_project_service),
):
    """Name suggestions for the search box (at most 5)."""
    return project_service.get_name_project(q)


@router.get("/search", response_model=list[ProjectListItem])
def get_project_by_name(
    name: str = Query(..., min_length=1),
    project_service: ProjectService = Depends(get_project_service),
):
    """Project cards whose name contains the given text."""
    return project_service.get_project_by_name(name)


@router.get("/user/{user_id}", response_model=list[ProjectListItem])
def get_list_project_by_user(
    user_id: UUID,
    page: int = Query(0, ge=0),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    sort: ProjectSortField = Query(ProjectSortField.CREATED_AT),
    desc: bool = Query(True),
    project_service: ProjectService = Depends(get_project_service),
):
    """Paginated project cards of one author."""
    return project_service.get_list_project_by_user_id(user_id, page, page_size, sort, desc)


@router.get("/category/{link}", response_model=list[ProjectListItem])
def get_list_project_by_category(
    link: str,
    page: int = Query(0, ge=0),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    sort: ProjectSortField = Query(ProjectSortField.CREATED_AT),
    desc: bool = Query(True),
    project_service: ProjectService = Depends(get_project_service),
):
    """Paginated project cards of one category, by category link."""
    return project_service.get_list_project_by_category(link, page, page_size, sort, desc)


@router.get("/{project_id}", response_model=ProjectDetail)
def get_detail_project(
    project_id: UUID,
    project_service: ProjectService = Depends(get_project_service),
):
    """Project with author, video, thumbnail, gallery and categories."""
    return project_service.get_detail_project(project_id)


@router.put("/{project_id}", response_model=MessageResponse)
def update_project(
    project_id: UUID,
    data: ProjectUpdate,
    project_service: ProjectService = Depends(get_project_service),
    current_user: User = Depends(get_current_user),
):
    """Update a project. A non-empty category_id_list replaces its categories."""
    ensure_author(project_service, project_id, current_user)
    return MessageResponse(message=project_service.update_project(project_id, data))


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project(
    project_id: UUID,
    project_service: ProjectService = Depends(get_project_service),
    current_user: User = Depends(get_current_user),
):
    """Delete a project together with its video, thumbnail and gallery files."""
    ensure_author(project_service, project_id, current_user)
    return MessageResponse(message=project_service.delete_project(project_id))
