# src/news_vote/api/v1/endpoints/categories.py
"""Category listing and admin management."""

from typing import Literal

from fastapi import APIRouter, status

from news_vote.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from news_vote.services import categories as category_service

from ..dependencies import AdminUserDep, SessionDep

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("/", response_model=list[CategoryResponse])
async def list_categories(db: SessionDep) -> list[CategoryResponse]:
    """Return active categories in display order."""
    return [CategoryResponse.model_validate(c) for c in category_service.list_categories(db)]


@router.get("/all", response_model=list[CategoryResponse])
async def list_all_categories(db: SessionDep, current_user: AdminUserDep) -> list[CategoryResponse]:
    """Return every category, including inactive ones. Admin only."""
    categories = category_service.list_categories(db, include_inactive=True)
    return [CategoryResponse.model_validate(c) for c in categories]


@router.post("/", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: CategoryCreate,
    db: SessionDep,
    current_user: AdminUserDep,
) -> CategoryResponse:
    category = category_service.create_category(db, **payload.model_dump())
    return CategoryResponse.model_validate(category)


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str,
    payload: CategoryUpdate,
    db: SessionDep,
    current_user: AdminUserDep,
) -> CategoryResponse:
    category = category_service.update_category(
        db, category_id, payload.model_dump(exclude_unset=True)
    )
    return CategoryResponse.model_validate(category)


@router.post("/{category_id}/toggle", response_model=CategoryResponse)
async def toggle_category(
    category_id: str,
    db: SessionDep,
    current_user: AdminUserDep,
) -> CategoryResponse:
    """Activate or deactivate a category."""
    return CategoryResponse.model_validate(category_service.toggle_active(db, category_id))


@router.post("/{category_id}/move/{direction}", response_model=CategoryResponse)
async def move_category(
    category_id: str,
    direction: Literal["up", "down"],
    db: SessionDep,
    current_user: AdminUserDep,
) -> CategoryResponse:
    """Swap a category's position with its neighbour."""
    return CategoryResponse.model_validate(
        category_service.move_category(db, category_id, direction)
    )


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(category_id: str, db: SessionDep, current_user: AdminUserDep) -> None:
    category_service.delete_category(db, category_id)
