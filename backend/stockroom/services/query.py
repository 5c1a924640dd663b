"""List-request normalization and pagination metadata.

Query strings come from browsers, so nothing here raises: bad page numbers
fall back to 1, limits are clamped, unknown sort fields fall back to name.
"""

import math

from stockroom.repositories.base import InventoryQuery
from stockroom.schemas.common import Pagination

DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# wire name -> model attribute
SORT_FIELDS = {
    "name": "name",
    "quantity": "quantity",
    "status": "status",
    "price": "price",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}
ARCHIVED_SORT_FIELDS = {**SORT_FIELDS, "archivedAt": "archived_at"}


def parse_page(value: str | int | None) -> int:
    try:
        page = int(value)
    except (TypeError, ValueError):
        return 1
    return max(1, page)


def parse_limit(value: str | int | None, default: int = DEFAULT_LIMIT) -> int:
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return default
    return min(MAX_LIMIT, max(1, limit))


def is_descending(order: str | None) -> bool:
    return (order or "").strip().lower() == "desc"


def resolve_sort(sort: str | None, archived: bool = False) -> str:
    fields = ARCHIVED_SORT_FIELDS if archived else SORT_FIELDS
    if sort in fields:
        return fields[sort]
    # accept snake_case too
    if sort in fields.values():
        return sort
    return "name"


def _filter_value(value: str | None) -> str | None:
    value = (value or "").strip()
    # "all" is what the UI sends for an unset dropdown
    return None if not value or value.lower() == "all" else value


def build_inventory_query(
    *,
    page: str | int | None = None,
    limit: str | int | None = None,
    search: str | None = None,
    category: str | None = None,
    status: str | None = None,
    sort: str | None = None,
    order: str | None = None,
    archived: bool = False,
) -> InventoryQuery:
    if archived and not sort:
        # Most recently archived first unless the caller asks otherwise
        sort, order = "archivedAt", order or "desc"
    return InventoryQuery(
        page=parse_page(page),
        limit=parse_limit(limit),
        search=(search or "").strip() or None,
        category=_filter_value(category),
        status=_filter_value(status),
        sort=resolve_sort(sort, archived),
        descending=is_descending(order),
        archived=archived,
    )


def paginate(total: int, page: int, limit: int) -> Pagination:
    total_pages = math.ceil(total / limit) if limit else 0
    return Pagination(
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )
