"""Inventory mutation service.

Every mutation follows the same two phases: validate, write and commit the
item, then ask the audit sink to record what happened. Status is derived
from quantity here and nowhere else (see ``stock_status_for``).

Concurrent updates to one item are not coordinated: the change description
compares against the row as read just before the write, so two racing
updates may each describe a diff that misses the other's change.
"""

import logging
import uuid
from uuid import UUID

from stockroom.core.errors import ConflictError, NotFoundError
from stockroom.models.activity_log import ActivityType
from stockroom.models.inventory import InventoryItem, stock_status_for
from stockroom.models.mixins import utcnow
from stockroom.repositories.base import InventoryQuery, UnitOfWork
from stockroom.schemas.common import Pagination
from stockroom.schemas.inventory import InventoryCreate, InventoryUpdate
from stockroom.schemas.stats import InventoryStats
from stockroom.services.audit import AuditLogSink
from stockroom.services.query import paginate

logger = logging.getLogger(__name__)

# Fields a partial update may explicitly clear with null
CLEARABLE_FIELDS = {"price", "supplier", "serial_number", "last_restocked", "image"}
TRACKED_FIELDS = ("name", "quantity", "category", "price", "status")


def _format_price(value) -> str:
    return "N/A" if value is None else f"${float(value):.2f}"


def describe_changes(before: dict, after: InventoryItem) -> str:
    """Human-readable diff of the tracked fields, e.g. ``Updated quantity from 10 to 3``."""
    changes = []
    if before["name"] != after.name:
        changes.append(f'name from "{before["name"]}" to "{after.name}"')
    if before["quantity"] != after.quantity:
        changes.append(f"quantity from {before['quantity']} to {after.quantity}")
    if before["category"] != after.category:
        changes.append(f'category from "{before["category"]}" to "{after.category}"')
    if _format_price(before["price"]) != _format_price(after.price):
        changes.append(f"price from {_format_price(before['price'])} to {_format_price(after.price)}")
    if before["status"] != after.status:
        changes.append(f'status from "{before["status"]}" to "{after.status}"')
    if not changes:
        return f"Updated item: {after.name}"
    return f"Updated {', '.join(changes)}"


class InventoryService:
    def __init__(self, uow: UnitOfWork, audit: AuditLogSink | None = None):
        self.uow = uow
        self.audit = audit or AuditLogSink(uow)

    async def _require(self, item_id: UUID) -> InventoryItem:
        item = await self.uow.inventory.get(item_id)
        if not item:
            raise NotFoundError("Item not found")
        return item

    # ── Queries ─────────────────────────────────────

    async def get(self, item_id: UUID) -> InventoryItem:
        return await self._require(item_id)

    async def list(self, query: InventoryQuery) -> tuple[list[InventoryItem], Pagination]:
        items, total = await self.uow.inventory.search(query)
        return items, paginate(total, query.page, query.limit)

    async def statistics(self) -> InventoryStats:
        return await self.uow.inventory.statistics()

    # ── Mutations ───────────────────────────────────

    async def create(self, data: InventoryCreate, actor: str) -> InventoryItem:
        now = utcnow()
        values = data.model_dump()
        item = InventoryItem(
            id=uuid.uuid4(),
            **values,
            status=stock_status_for(data.quantity).value,
            is_archived=False,
            archived_at=None,
            archived_by=None,
            created_at=now,
            updated_at=now,
        )
        item = await self.uow.inventory.add(item)
        await self.uow.commit()
        logger.info("Inventory item created: %r (qty=%d) by %s", item.name, item.quantity, actor)

        await self.audit.record(
            ActivityType.ITEM_ADDED,
            actor,
            item.name,
            f"Added new item: {item.name} (Quantity: {item.quantity}, Category: {item.category})",
        )
        return item

    async def update(self, item_id: UUID, data: InventoryUpdate, actor: str) -> InventoryItem:
        current = await self._require(item_id)
        before = {field: getattr(current, field) for field in TRACKED_FIELDS}

        values = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in CLEARABLE_FIELDS
        }
        if "quantity" in values:
            values["status"] = stock_status_for(values["quantity"]).value
        values["updated_at"] = utcnow()

        item = await self.uow.inventory.update(item_id, values)
        if not item:
            # Deleted between the read and the write
            raise NotFoundError("Item not found")
        await self.uow.commit()

        description = describe_changes(before, item)
        logger.info("Inventory item updated: %r by %s (%s)", item.name, actor, description)
        await self.audit.record(ActivityType.ITEM_UPDATED, actor, item.name, description)
        return item

    async def delete(self, item_id: UUID, actor: str) -> None:
        item = await self._require(item_id)
        if item.is_archived:
            raise ConflictError("Archived items must be restored before they can be deleted")
        name, quantity, category = item.name, item.quantity, item.category

        if not await self.uow.inventory.delete(item_id):
            raise NotFoundError("Item not found")
        await self.uow.commit()
        logger.info("Inventory item deleted: %r by %s", name, actor)

        await self.audit.record(
            ActivityType.ITEM_DELETED,
            actor,
            name,
            f"Deleted item: {name} (Quantity: {quantity}, Category: {category})",
        )

    async def archive(self, item_id: UUID, actor: str) -> InventoryItem:
        current = await self._require(item_id)
        if current.is_archived:
            raise ConflictError("Item is already archived")

        now = utcnow()
        item = await self.uow.inventory.update(
            item_id,
            {"is_archived": True, "archived_at": now, "archived_by": actor, "updated_at": now},
        )
        if not item:
            raise NotFoundError("Item not found")
        await self.uow.commit()
        logger.info("Inventory item archived: %r by %s", item.name, actor)

        await self.audit.record(ActivityType.ITEM_ARCHIVED, actor, item.name, f"Archived item: {item.name}")
        return item

    async def restore(self, item_id: UUID, actor: str) -> InventoryItem:
        current = await self._require(item_id)
        if not current.is_archived:
            raise ConflictError("Item is not archived")

        item = await self.uow.inventory.update(
            item_id,
            {"is_archived": False, "archived_at": None, "archived_by": None, "updated_at": utcnow()},
        )
        if not item:
            raise NotFoundError("Item not found")
        await self.uow.commit()
        logger.info("Inventory item restored: %r by %s", item.name, actor)

        await self.audit.record(ActivityType.ITEM_RESTORED, actor, item.name, f"Restored item: {item.name}")
        return item
