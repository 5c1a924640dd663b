"""SQLAlchemy models for Stockroom."""

from stockroom.models.inventory import InventoryItem, StockStatus, stock_status_for
from stockroom.models.category import Category
from stockroom.models.activity_log import ActivityLog, ActivityType
from stockroom.models.role import PermissionAction, RoleType
from stockroom.models.user import User

__all__ = [
    "InventoryItem",
    "StockStatus",
    "stock_status_for",
    "Category",
    "ActivityLog",
    "ActivityType",
    "PermissionAction",
    "RoleType",
    "User",
]
