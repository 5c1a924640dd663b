"""Aggregate inventory statistics."""

from fastapi import APIRouter, Depends

from stockroom.core.deps import get_inventory_service, require_permission
from stockroom.models.role import PermissionAction
from stockroom.schemas.auth import CurrentUser
from stockroom.schemas.stats import StatsResponse
from stockroom.services.inventory import InventoryService

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=StatsResponse)
async def get_stats(
    current_user: CurrentUser = Depends(require_permission(PermissionAction.STATS_READ)),
    service: InventoryService = Depends(get_inventory_service),
):
    """Counts over non-archived items: totals, per status, per category."""
    return StatsResponse(stats=await service.statistics())
