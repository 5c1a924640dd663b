"""Inventory report schemas."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from stockroom.schemas.common import CamelModel

ReportRange = Literal["today", "week", "month", "year", "all"]


class ReportRow(CamelModel):
    id: UUID
    name: str
    category: str
    quantity: int
    status: str
    description: str
    price: float
    created_at: datetime
    updated_at: datetime


class ReportSummary(CamelModel):
    total_items: int
    total_categories: int
    total_quantity: int
    in_stock: int
    low_stock: int
    out_of_stock: int


class ReportFilters(CamelModel):
    date_range: ReportRange = "all"
    categories: list[str] = []
    statuses: list[str] = []


class InventoryReport(CamelModel):
    success: bool = True
    items: list[ReportRow]
    summary: ReportSummary
    filters: ReportFilters
    generated_at: datetime
