"""Inventory management endpoints with RBAC enforcement."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from stockroom.core.deps import get_inventory_service, require_permission
from stockroom.models.role import PermissionAction
from stockroom.schemas.auth import CurrentUser
from stockroom.schemas.common import MessageResponse
from stockroom.schemas.inventory import (
    InventoryCreate,
    InventoryItemOut,
    InventoryItemResponse,
    InventoryListResponse,
    InventoryUpdate,
)
from stockroom.services.inventory import InventoryService
from stockroom.services.query import build_inventory_query

router = APIRouter(prefix="/inventory", tags=["inventory"])


def _item_response(item) -> InventoryItemResponse:
    return InventoryItemResponse(item=InventoryItemOut.model_validate(item))


@router.get("", response_model=InventoryListResponse)
async def list_inventory(
    page: str | None = None,
    limit: str | None = None,
    search: str | None = None,
    category: str | None = None,
    status: str | None = None,
    sort: str | None = None,
    order: str | None = None,
    current_user: CurrentUser = Depends(require_permission(PermissionAction.INVENTORY_READ)),
    service: InventoryService = Depends(get_inventory_service),
):
    """List active (non-archived) items with search, filters, sort and pagination."""
    query = build_inventory_query(
        page=page, limit=limit, search=search, category=category,
        status=status, sort=sort, order=order,
    )
    items, pagination = await service.list(query)
    return InventoryListResponse(
        items=[InventoryItemOut.model_validate(i) for i in items],
        pagination=pagination,
    )


@router.post("", response_model=InventoryItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    body: InventoryCreate,
    current_user: CurrentUser = Depends(require_permission(PermissionAction.INVENTORY_CREATE)),
    service: InventoryService = Depends(get_inventory_service),
):
    item = await service.create(body, actor=current_user.username)
    return _item_response(item)


# Declared before /{item_id} so "archived" is not parsed as an id
@router.get("/archived", response_model=InventoryListResponse)
async def list_archived(
    page: str | None = None,
    limit: str | None = None,
    search: str | None = None,
    sort: str | None = None,
    order: str | None = None,
    current_user: CurrentUser = Depends(require_permission(PermissionAction.INVENTORY_READ)),
    service: InventoryService = Depends(get_inventory_service),
):
    query = build_inventory_query(
        page=page, limit=limit, search=search, sort=sort, order=order, archived=True,
    )
    items, pagination = await service.list(query)
    return InventoryListResponse(
        items=[InventoryItemOut.model_validate(i) for i in items],
        pagination=pagination,
    )


@router.get("/{item_id}", response_model=InventoryItemResponse)
async def get_item(
    item_id: UUID,
    current_user: CurrentUser = Depends(require_permission(PermissionAction.INVENTORY_READ)),
    service: InventoryService = Depends(get_inventory_service),
):
    return _item_response(await service.get(item_id))


@router.put("/{item_id}", response_model=InventoryItemResponse)
async def update_item(
    item_id: UUID,
    body: InventoryUpdate,
    current_user: CurrentUser = Depends(require_permission(PermissionAction.INVENTORY_UPDATE)),
    service: InventoryService = Depends(get_inventory_service),
):
    """Partial update; status follows quantity when quantity is sent."""
    item = await service.update(item_id, body, actor=current_user.username)
    return _item_response(item)


@router.delete("/{item_id}", response_model=MessageResponse)
async def delete_item(
    item_id: UUID,
    current_user: CurrentUser = Depends(require_permission(PermissionAction.INVENTORY_DELETE)),
    service: InventoryService = Depends(get_inventory_service),
):
    """Permanently delete an active item. Archived items must be restored first."""
    await service.delete(item_id, actor=current_user.username)
    return MessageResponse(message="Item deleted successfully")


@router.patch("/{item_id}/archive", response_model=InventoryItemResponse)
async def archive_item(
    item_id: UUID,
    current_user: CurrentUser = Depends(require_permission(PermissionAction.INVENTORY_ARCHIVE)),
    service: InventoryService = Depends(get_inventory_service),
):
    return _item_response(await service.archive(item_id, actor=current_user.username))


@router.patch("/{item_id}/restore", response_model=InventoryItemResponse)
async def restore_item(
    item_id: UUID,
    current_user: CurrentUser = Depends(require_permission(PermissionAction.INVENTORY_ARCHIVE)),
    service: InventoryService = Depends(get_inventory_service),
):
    return _item_response(await service.restore(item_id, actor=current_user.username))
