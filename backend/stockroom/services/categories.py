"""Category management.

Items reference categories by name, so a rename rewrites every item that
carries the old name, and a category still referenced by any item (archived
ones included) cannot be deleted.
"""

import logging
import uuid
from uuid import UUID

from stockroom.core.errors import ConflictError, NotFoundError, ValidationError
from stockroom.models.category import DEFAULT_CATEGORY_COLOR, Category
from stockroom.models.mixins import utcnow
from stockroom.repositories.base import UnitOfWork
from stockroom.schemas.category import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def _require(self, category_id: UUID) -> Category:
        category = await self.uow.categories.get(category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    async def list(self, include_inactive: bool = False) -> list[Category]:
        return await self.uow.categories.list_all(include_inactive)

    async def get(self, category_id: UUID) -> tuple[Category, int]:
        """Return the category and how many items reference it."""
        category = await self._require(category_id)
        return category, await self.uow.inventory.count_by_category(category.name)

    async def create(self, data: CategoryCreate) -> Category:
        if await self.uow.categories.get_by_name(data.name):
            raise ConflictError("Category with this name already exists")

        now = utcnow()
        category = Category(
            id=uuid.uuid4(),
            name=data.name,
            description=data.description,
            color=data.color or DEFAULT_CATEGORY_COLOR,
            icon=data.icon,
            is_active=data.is_active,
            created_at=now,
            updated_at=now,
        )
        category = await self.uow.categories.add(category)
        await self.uow.commit()
        logger.info("Category created: %r", category.name)
        return category

    async def update(self, category_id: UUID, data: CategoryUpdate) -> tuple[Category, int]:
        """Apply changes; returns the category and the number of items renamed."""
        category = await self._require(category_id)
        old_name = category.name

        values = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None or k in ("description", "icon")}
        renamed = "name" in values and values["name"] != old_name
        if renamed:
            clash = await self.uow.categories.get_by_name(values["name"])
            if clash and clash.id != category_id:
                raise ConflictError("Category with this name already exists")
        values["updated_at"] = utcnow()

        category = await self.uow.categories.update(category_id, values)
        if not category:
            raise NotFoundError("Category not found")
        items_updated = 0
        if renamed:
            items_updated = await self.uow.inventory.rename_category(old_name, category.name)
        await self.uow.commit()

        if renamed:
            logger.info("Category renamed: %r -> %r (%d items updated)", old_name, category.name, items_updated)
        else:
            logger.info("Category updated: %r", category.name)
        return category, items_updated

    async def delete(self, category_id: UUID) -> None:
        category = await self._require(category_id)
        item_count = await self.uow.inventory.count_by_category(category.name)
        if item_count:
            raise ValidationError(
                f"Cannot delete category. {item_count} items are using this category.",
                extra={"itemCount": item_count},
            )
        if not await self.uow.categories.delete(category_id):
            raise NotFoundError("Category not found")
        await self.uow.commit()
        logger.info("Category deleted: %r", category.name)
