"""Inventory report: filtered dataset, summary, CSV and PDF renderings."""

import calendar
import csv
import io
import logging
from datetime import datetime, timedelta, timezone
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from stockroom.core.config import settings
from stockroom.models.inventory import StockStatus
from stockroom.models.mixins import utcnow
from stockroom.repositories.base import ReportQuery, UnitOfWork
from stockroom.schemas.report import InventoryReport, ReportFilters, ReportRow, ReportSummary

logger = logging.getLogger(__name__)

REPORT_COLUMNS = ["Item Name", "Category", "Quantity", "Status", "Description", "Date Added"]
REPORT_RANGES = ("today", "week", "month", "year", "all")


def split_csv(value: str | None) -> list[str]:
    """``"a, b,,c"`` -> ``["a", "b", "c"]``."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def _shift_months(moment: datetime, months: int) -> datetime:
    month_index = moment.month - 1 - months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def created_since(date_range: str | None, now: datetime | None = None) -> datetime | None:
    """Start of the reporting window (UTC midnight), or None for ``all``."""
    now = (now or utcnow()).astimezone(timezone.utc)
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if date_range == "today":
        return midnight
    if date_range == "week":
        return midnight - timedelta(days=7)
    if date_range == "month":
        return _shift_months(midnight, 1)
    if date_range == "year":
        return _shift_months(midnight, 12)
    return None


def summarize(rows: list[ReportRow]) -> ReportSummary:
    return ReportSummary(
        total_items=len(rows),
        total_categories=len({row.category for row in rows}),
        total_quantity=sum(row.quantity for row in rows),
        in_stock=sum(1 for row in rows if row.status == StockStatus.IN_STOCK.value),
        low_stock=sum(1 for row in rows if row.status == StockStatus.LOW_STOCK.value),
        out_of_stock=sum(1 for row in rows if row.status == StockStatus.OUT_OF_STOCK.value),
    )


class ReportService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def inventory_report(
        self,
        date_range: str | None = None,
        categories: str | None = None,
        statuses: str | None = None,
    ) -> InventoryReport:
        date_range = date_range if date_range in REPORT_RANGES else "all"
        filters = ReportFilters(
            date_range=date_range,
            categories=split_csv(categories),
            statuses=split_csv(statuses),
        )
        items = await self.uow.inventory.list_for_report(
            ReportQuery(
                created_since=created_since(date_range),
                categories=filters.categories,
                statuses=filters.statuses,
            )
        )
        now = utcnow()
        rows = [
            ReportRow(
                id=item.id,
                name=item.name,
                category=item.category,
                quantity=item.quantity or 0,
                status=item.status,
                description=item.description or "",
                price=float(item.price or 0),
                created_at=item.created_at or now,
                updated_at=item.updated_at or now,
            )
            for item in items
        ]
        logger.info("Inventory report generated: %d rows (range=%s)", len(rows), date_range)
        return InventoryReport(items=rows, summary=summarize(rows), filters=filters, generated_at=now)


def report_filename(extension: str, now: datetime | None = None) -> str:
    return f"inventory-report-{(now or utcnow()).strftime('%Y-%m-%d')}.{extension}"


def render_csv(report: InventoryReport) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(REPORT_COLUMNS)
    for row in report.items:
        writer.writerow([
            row.name,
            row.category,
            row.quantity,
            row.status,
            row.description,
            row.created_at.strftime("%Y-%m-%d"),
        ])
    return buffer.getvalue()


def render_pdf(report: InventoryReport) -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        leftMargin=0.5 * inch,
        rightMargin=0.5 * inch,
        topMargin=0.5 * inch,
        bottomMargin=0.5 * inch,
        title="Inventory Report",
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "ReportTitle",
        parent=styles["Heading1"],
        fontSize=18,
        spaceAfter=6,
    )
    cell_style = ParagraphStyle("Cell", parent=styles["Normal"], fontSize=8, leading=10)

    content = [
        Paragraph(f"{escape(settings.PROJECT_NAME)} Inventory Report", title_style),
        Paragraph(f"Generated: {report.generated_at.strftime('%Y-%m-%d %H:%M UTC')}", styles["Normal"]),
        Spacer(1, 8),
    ]

    summary = report.summary
    summary_table = Table(
        [
            ["Total Items", "Categories", "Total Quantity", "In Stock", "Low Stock", "Out of Stock"],
            [
                summary.total_items,
                summary.total_categories,
                summary.total_quantity,
                summary.in_stock,
                summary.low_stock,
                summary.out_of_stock,
            ],
        ],
        hAlign="LEFT",
    )
    summary_table.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("BACKGROUND", (0, 0), (-1, 0), colors.whitesmoke),
    ]))
    content += [summary_table, Spacer(1, 12)]

    data = [REPORT_COLUMNS]
    for row in report.items:
        data.append([
            Paragraph(escape(row.name), cell_style),
            Paragraph(escape(row.category), cell_style),
            str(row.quantity),
            row.status,
            Paragraph(escape(row.description), cell_style),
            row.created_at.strftime("%Y-%m-%d"),
        ])
    items_table = Table(
        data,
        colWidths=[2.0 * inch, 1.3 * inch, 0.8 * inch, 1.0 * inch, 4.4 * inch, 1.0 * inch],
        repeatRows=1,
    )
    items_table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#3b82f6")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#f3f4f6")]),
    ]))
    content.append(items_table)

    doc.build(content)
    return buffer.getvalue()
