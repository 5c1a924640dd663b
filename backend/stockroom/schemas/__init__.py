from stockroom.schemas.inventory import (
    InventoryCreate, InventoryUpdate, InventoryItemOut, InventoryListResponse,
)
from stockroom.schemas.category import (
    CategoryCreate, CategoryUpdate, CategoryOut,
)
from stockroom.schemas.activity_log import (
    ActivityCreate, ActivityOut,
)

__all__ = [
    "InventoryCreate", "InventoryUpdate", "InventoryItemOut", "InventoryListResponse",
    "CategoryCreate", "CategoryUpdate", "CategoryOut",
    "ActivityCreate", "ActivityOut",
]
