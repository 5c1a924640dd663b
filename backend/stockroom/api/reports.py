"""Inventory report endpoints: JSON dataset plus CSV and PDF exports (owner only)."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from stockroom.core.deps import get_report_service, require_permission
from stockroom.models.role import PermissionAction
from stockroom.schemas.auth import CurrentUser
from stockroom.schemas.report import InventoryReport
from stockroom.services.reports import ReportService, render_csv, render_pdf, report_filename

router = APIRouter(prefix="/reports", tags=["reports"])

require_report = require_permission(PermissionAction.REPORT_INVENTORY)


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


@router.get("/inventory", response_model=InventoryReport)
async def inventory_report(
    date_range: str | None = Query(None, alias="dateRange"),
    categories: str | None = None,
    statuses: str | None = None,
    current_user: CurrentUser = Depends(require_report),
    service: ReportService = Depends(get_report_service),
):
    """Non-archived items filtered by creation window, categories and statuses."""
    return await service.inventory_report(date_range, categories, statuses)


@router.get("/inventory/csv")
async def inventory_report_csv(
    date_range: str | None = Query(None, alias="dateRange"),
    categories: str | None = None,
    statuses: str | None = None,
    current_user: CurrentUser = Depends(require_report),
    service: ReportService = Depends(get_report_service),
):
    report = await service.inventory_report(date_range, categories, statuses)
    return Response(
        content=render_csv(report),
        media_type="text/csv",
        headers=_attachment(report_filename("csv", report.generated_at)),
    )


@router.get("/inventory/pdf")
async def inventory_report_pdf(
    date_range: str | None = Query(None, alias="dateRange"),
    categories: str | None = None,
    statuses: str | None = None,
    current_user: CurrentUser = Depends(require_report),
    service: ReportService = Depends(get_report_service),
):
    report = await service.inventory_report(date_range, categories, statuses)
    return Response(
        content=render_pdf(report),
        media_type="application/pdf",
        headers=_attachment(report_filename("pdf", report.generated_at)),
    )
