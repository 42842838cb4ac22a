"""
Categories API Endpoints
CRUD operations for project categories.

Categories are public to read; changes require authentication and only
the user who created a category may modify it.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from uuid import UUID

from app.api.v1.deps import get_current_user, get_category_service
from app.models.user import User
from app.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryThumbUpdate,
    CategoryResponse,
    CategoriesResponse,
)
from app.schemas.project import MessageResponse
from app.services.category_service import CategoryService


router = APIRouter(prefix="/categories", tags=["Categories"])


def ensure_owner(category_service: CategoryService, category_id: UUID, user: User) -> None:
    """Verify user created the category."""
    category = category_service.get_category(category_id)
    if category.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the creator can modify this category"
        )


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    data: CategoryCreate,
    category_service: CategoryService = Depends(get_category_service),
    current_user: User = Depends(get_current_user)
):
    """
    Create a new category.
    Name and link must not be used by another category.
    """
    return category_service.create_category(data, current_user.id)


@router.get("", response_model=CategoriesResponse)
def get_categories(
    category_service: CategoryService = Depends(get_category_service),
):
    """Get all categories ordered by name."""
    categories = category_service.get_list_category()
    return CategoriesResponse(categories=categories, total=len(categories))


@router.get("/{link}", response_model=CategoryResponse)
def get_category_by_link(
    link: str,
    category_service: CategoryService = Depends(get_category_service),
):
    """Get a category by its short link."""
    return category_service.get_by_link(link)


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: UUID,
    data: CategoryUpdate,
    category_service: CategoryService = Depends(get_category_service),
    current_user: User = Depends(get_current_user)
):
    """Update a category."""
    ensure_owner(category_service, category_id, current_user)
    return category_service.update_category(category_id, data)


@router.put("/{category_id}/thumb", response_model=CategoryResponse)
def set_category_thumb(
    category_id: UUID,
    data: CategoryThumbUpdate,
    category_service: CategoryService = Depends(get_category_service),
    current_user: User = Depends(get_current_user)
):
    """Attach a registered video as the category background."""
    ensure_owner(category_service, category_id, current_user)
    return category_service.set_video_thumb(category_id, data.video_id)


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: UUID,
    category_service: CategoryService = Depends(get_category_service),
    current_user: User = Depends(get_current_user)
):
    """Delete a category and its background video."""
    ensure_owner(category_service, category_id, current_user)
    return MessageResponse(message=category_service.delete_category(category_id))
