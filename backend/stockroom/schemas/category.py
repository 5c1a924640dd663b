"""Category schemas for API request/response."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import Field, StringConstraints

from stockroom.schemas.common import CamelModel

CategoryNameField = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
HEX_COLOR = r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$"


class CategoryCreate(CamelModel):
    name: CategoryNameField
    description: str | None = Field(None, max_length=200)
    color: str | None = Field(None, pattern=HEX_COLOR)
    icon: str | None = Field(None, max_length=50)
    is_active: bool = True


class CategoryUpdate(CamelModel):
    name: CategoryNameField | None = None
    description: str | None = Field(None, max_length=200)
    color: str | None = Field(None, pattern=HEX_COLOR)
    icon: str | None = Field(None, max_length=50)
    is_active: bool | None = None


class CategoryOut(CamelModel):
    id: UUID
    name: str
    description: str | None = None
    color: str
    icon: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
    item_count: int | None = None


class CategoryResponse(CamelModel):
    success: bool = True
    category: CategoryOut
    items_updated: int | None = None


class CategoryListResponse(CamelModel):
    success: bool = True
    categories: list[CategoryOut]


class CategoryDeleteResponse(CamelModel):
    success: bool = True
    id: UUID
