"""Inventory schemas for request/response.

These are the single validator for inventory input; ``status`` is never
accepted from a client.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import Field, StringConstraints

from stockroom.schemas.common import CamelModel, Pagination

ItemName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
CategoryName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
Description = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)]


class InventoryCreate(CamelModel):
    name: ItemName
    category: CategoryName
    description: Description
    quantity: int = Field(0, ge=0, description="Current stock quantity")
    price: float | None = Field(None, ge=0)
    supplier: str | None = Field(None, max_length=255)
    serial_number: str | None = Field(None, max_length=100)
    last_restocked: datetime | None = None
    image: str | None = Field(None, max_length=500)


class InventoryUpdate(CamelModel):
    """Partial update: only fields present in the request are applied."""
    name: ItemName | None = None
    category: CategoryName | None = None
    description: Description | None = None
    quantity: int | None = Field(None, ge=0)
    price: float | None = Field(None, ge=0)
    supplier: str | None = Field(None, max_length=255)
    serial_number: str | None = Field(None, max_length=100)
    last_restocked: datetime | None = None
    image: str | None = Field(None, max_length=500)


class InventoryItemOut(CamelModel):
    id: UUID
    name: str
    quantity: int
    category: str
    status: str
    description: str
    price: float | None = None
    supplier: str | None = None
    serial_number: str | None = None
    last_restocked: datetime | None = None
    image: str | None = None
    is_archived: bool = False
    archived_at: datetime | None = None
    archived_by: str | None = None
    created_at: datetime
    updated_at: datetime


class InventoryItemResponse(CamelModel):
    success: bool = True
    item: InventoryItemOut


class InventoryListResponse(CamelModel):
    """Paginated list of inventory items."""
    success: bool = True
    items: list[InventoryItemOut]
    pagination: Pagination
