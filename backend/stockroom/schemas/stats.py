"""Aggregate statistics schemas."""

from stockroom.schemas.common import CamelModel


class Overview(CamelModel):
    total_items: int = 0
    total_quantity: int = 0


class StatusBreakdown(CamelModel):
    in_stock: int = 0
    low_stock: int = 0
    out_of_stock: int = 0


class CategoryCount(CamelModel):
    category: str
    count: int


class InventoryStats(CamelModel):
    overview: Overview
    status_breakdown: StatusBreakdown
    category_breakdown: list[CategoryCount]


class StatsResponse(CamelModel):
    success: bool = True
    stats: InventoryStats
