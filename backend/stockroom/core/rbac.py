"""Role -> permission matrix.

RBAC Matrix:
┌─────────────────────┬───────┬──────────┐
│ Permission          │ Owner │ Employee │
├─────────────────────┼───────┼──────────┤
│ inventory:read      │  ✓    │    ✓     │
│ inventory:create    │  ✓    │    ✓     │
│ inventory:update    │  ✓    │    ✓     │
│ inventory:delete    │  ✓    │    ✓     │
│ inventory:archive   │  ✓    │    ✓     │
│ category:read       │  ✓    │    ✓     │
│ category:write      │  ✓    │    ✓     │
│ activity:read       │  ✓    │          │
│ activity:create     │  ✓    │    ✓     │
│ stats:read          │  ✓    │    ✓     │
│ report:inventory    │  ✓    │          │
│ user:read           │  ✓    │          │
│ user:create         │  ✓    │          │
│ user:update         │  ✓    │          │
│ user:delete         │  ✓    │          │
└─────────────────────┴───────┴──────────┘
"""

from stockroom.models.role import PermissionAction, RoleType

ROLE_PERMISSIONS: dict[RoleType, list[PermissionAction]] = {
    RoleType.OWNER: list(PermissionAction),  # All permissions
    RoleType.EMPLOYEE: [
        PermissionAction.INVENTORY_READ,
        PermissionAction.INVENTORY_CREATE,
        PermissionAction.INVENTORY_UPDATE,
        PermissionAction.INVENTORY_DELETE,
        PermissionAction.INVENTORY_ARCHIVE,
        PermissionAction.CATEGORY_READ,
        PermissionAction.CATEGORY_WRITE,
        PermissionAction.ACTIVITY_CREATE,
        PermissionAction.STATS_READ,
    ],
}


def permissions_for(role: str | RoleType) -> list[str]:
    return [p.value for p in ROLE_PERMISSIONS[RoleType(role)]]
