"""Activity log (audit history) endpoints."""

from fastapi import APIRouter, Depends, Query, status

from stockroom.core.deps import get_audit_sink, require_permission
from stockroom.models.role import PermissionAction
from stockroom.schemas.activity_log import (
    ActivityCreate,
    ActivityListResponse,
    ActivityOut,
    ActivityResponse,
    DateWindow,
)
from stockroom.schemas.auth import CurrentUser
from stockroom.services.audit import AuditLogSink

router = APIRouter(prefix="/activity-log", tags=["activity-log"])


@router.get("", response_model=ActivityListResponse)
async def list_activities(
    type: str | None = None,
    search: str | None = None,
    date_range: DateWindow | None = Query(None, alias="dateRange"),
    order: str | None = None,
    current_user: CurrentUser = Depends(require_permission(PermissionAction.ACTIVITY_READ)),
    audit: AuditLogSink = Depends(get_audit_sink),
):
    """Audit history, newest first unless order=asc. Owner only."""
    entries = await audit.list(type=type, search=search, date_range=date_range, order=order)
    return ActivityListResponse(activities=[ActivityOut.model_validate(e) for e in entries])


@router.post("", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED)
async def create_activity(
    body: ActivityCreate,
    current_user: CurrentUser = Depends(require_permission(PermissionAction.ACTIVITY_CREATE)),
    audit: AuditLogSink = Depends(get_audit_sink),
):
    """Append a manual entry; unlike mutation auditing, a failed write is an error here."""
    entry = await audit.append(body.type, body.user, body.item_name, body.description)
    return ActivityResponse(activity=ActivityOut.model_validate(entry))
