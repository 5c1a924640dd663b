"""Inventory item model and the stock-status rule."""

import enum
from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Integer, Numeric, String, Index
from sqlalchemy.orm import Mapped, mapped_column

from stockroom.db.base import Base
from stockroom.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin

LOW_STOCK_MAX = 5


class StockStatus(str, enum.Enum):
    IN_STOCK = "In Stock"
    LOW_STOCK = "Low Stock"
    OUT_OF_STOCK = "Out of Stock"


def stock_status_for(quantity: int) -> StockStatus:
    """The only place a stock status is ever derived from a quantity."""
    if quantity <= 0:
        return StockStatus.OUT_OF_STOCK
    if quantity <= LOW_STOCK_MAX:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


class InventoryItem(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "inventory_items"
    __table_args__ = (
        Index("ix_inventory_items_archived_name", "is_archived", "name"),
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        String(20), default=StockStatus.OUT_OF_STOCK.value, nullable=False, index=True
    )
    description: Mapped[str] = mapped_column(String(500), nullable=False)

    price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    supplier: Mapped[str | None] = mapped_column(String(255))
    serial_number: Mapped[str | None] = mapped_column(String(100))
    last_restocked: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    image: Mapped[str | None] = mapped_column(String(500))

    is_archived: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    archived_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    archived_by: Mapped[str | None] = mapped_column(String(255))

    def __repr__(self) -> str:
        return f"<InventoryItem {self.name!r} qty={self.quantity} status={self.status!r}>"
