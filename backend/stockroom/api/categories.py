"""Category CRUD endpoints with RBAC enforcement."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from stockroom.core.deps import get_category_service, require_permission
from stockroom.models.role import PermissionAction
from stockroom.schemas.auth import CurrentUser
from stockroom.schemas.category import (
    CategoryCreate,
    CategoryDeleteResponse,
    CategoryListResponse,
    CategoryOut,
    CategoryResponse,
    CategoryUpdate,
)
from stockroom.services.categories import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    include_inactive: bool = Query(False, alias="includeInactive"),
    current_user: CurrentUser = Depends(require_permission(PermissionAction.CATEGORY_READ)),
    service: CategoryService = Depends(get_category_service),
):
    """List categories sorted by name (active only unless includeInactive=true)."""
    categories = await service.list(include_inactive)
    return CategoryListResponse(categories=[CategoryOut.model_validate(c) for c in categories])


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CategoryCreate,
    current_user: CurrentUser = Depends(require_permission(PermissionAction.CATEGORY_WRITE)),
    service: CategoryService = Depends(get_category_service),
):
    category = await service.create(body)
    return CategoryResponse(category=CategoryOut.model_validate(category))


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: UUID,
    current_user: CurrentUser = Depends(require_permission(PermissionAction.CATEGORY_READ)),
    service: CategoryService = Depends(get_category_service),
):
    """Get a single category with the number of items using it."""
    category, item_count = await service.get(category_id)
    out = CategoryOut.model_validate(category).model_copy(update={"item_count": item_count})
    return CategoryResponse(category=out)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: UUID,
    body: CategoryUpdate,
    current_user: CurrentUser = Depends(require_permission(PermissionAction.CATEGORY_WRITE)),
    service: CategoryService = Depends(get_category_service),
):
    """Update a category; a rename is applied to every item carrying the old name."""
    category, items_updated = await service.update(category_id, body)
    return CategoryResponse(category=CategoryOut.model_validate(category), items_updated=items_updated)


@router.delete("/{category_id}", response_model=CategoryDeleteResponse)
async def delete_category(
    category_id: UUID,
    current_user: CurrentUser = Depends(require_permission(PermissionAction.CATEGORY_WRITE)),
    service: CategoryService = Depends(get_category_service),
):
    """Delete a category that no item (active or archived) references."""
    await service.delete(category_id)
    return CategoryDeleteResponse(id=category_id)
