"""Account roles and permission actions."""

import enum


class PermissionAction(str, enum.Enum):
    """All permission actions in the inventory system."""
    # Inventory
    INVENTORY_READ = "inventory:read"
    INVENTORY_CREATE = "inventory:create"
    INVENTORY_UPDATE = "inventory:update"
    INVENTORY_DELETE = "inventory:delete"
    INVENTORY_ARCHIVE = "inventory:archive"
    # Categories
    CATEGORY_READ = "category:read"
    CATEGORY_WRITE = "category:write"
    # Activity log
    ACTIVITY_READ = "activity:read"
    ACTIVITY_CREATE = "activity:create"
    # Statistics & reports
    STATS_READ = "stats:read"
    REPORT_INVENTORY = "report:inventory"
    # Accounts
    USER_READ = "user:read"
    USER_CREATE = "user:create"
    USER_UPDATE = "user:update"
    USER_DELETE = "user:delete"


class RoleType(str, enum.Enum):
    OWNER = "owner"
    EMPLOYEE = "employee"
