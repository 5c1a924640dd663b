"""SQLAlchemy (async) repositories."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from sqlalchemy import delete, desc, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from stockroom.db.base import Database
from stockroom.models.activity_log import ActivityLog
from stockroom.models.category import Category
from stockroom.models.inventory import InventoryItem, StockStatus
from stockroom.models.user import User
from stockroom.repositories.base import (
    ActivityLogRepository,
    ActivityQuery,
    CategoryRepository,
    DataStore,
    InventoryQuery,
    InventoryRepository,
    ReportQuery,
    UnitOfWork,
    UserRepository,
)
from stockroom.schemas.stats import CategoryCount, InventoryStats, Overview, StatusBreakdown

logger = logging.getLogger(__name__)

NUMERIC_FIELDS = {"quantity", "price"}


def _escape_like(s: str) -> str:
    """Escape SQL LIKE wildcards in user input."""
    return s.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _like(term: str) -> str:
    return f"%{_escape_like(term)}%"


class SqlInventoryRepository(InventoryRepository):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, item_id: UUID) -> InventoryItem | None:
        return await self.db.get(InventoryItem, item_id)

    async def get_by_name(self, name: str) -> InventoryItem | None:
        result = await self.db.execute(select(InventoryItem).where(InventoryItem.name == name).limit(1))
        return result.scalars().first()

    async def add(self, item: InventoryItem) -> InventoryItem:
        self.db.add(item)
        await self.db.flush()
        await self.db.refresh(item)
        return item

    async def update(self, item_id: UUID, values: dict) -> InventoryItem | None:
        item = await self.db.get(InventoryItem, item_id)
        if not item:
            return None
        for field, value in values.items():
            setattr(item, field, value)
        await self.db.flush()
        await self.db.refresh(item)
        return item

    async def delete(self, item_id: UUID) -> bool:
        result = await self.db.execute(delete(InventoryItem).where(InventoryItem.id == item_id))
        return result.rowcount > 0

    def _filtered(self, query: InventoryQuery):
        stmt = select(InventoryItem).where(InventoryItem.is_archived.is_(query.archived))
        if query.search:
            like = _like(query.search)
            stmt = stmt.where(
                or_(
                    InventoryItem.name.ilike(like, escape="\\"),
                    InventoryItem.category.ilike(like, escape="\\"),
                    InventoryItem.description.ilike(like, escape="\\"),
                )
            )
        if query.category:
            stmt = stmt.where(InventoryItem.category == query.category)
        if query.status:
            stmt = stmt.where(InventoryItem.status == query.status)
        return stmt

    async def search(self, query: InventoryQuery) -> tuple[list[InventoryItem], int]:
        stmt = self._filtered(query)

        count_query = select(func.count()).select_from(stmt.subquery())
        total = (await self.db.execute(count_query)).scalar_one()

        column = getattr(InventoryItem, query.sort)
        if query.sort in NUMERIC_FIELDS:
            column = func.coalesce(column, 0)
        elif query.sort in ("name", "status"):
            column = func.lower(column)
        order = desc(column) if query.descending else column.asc()

        stmt = stmt.order_by(order, InventoryItem.id).offset(query.offset).limit(query.limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all()), total

    async def list_for_report(self, query: ReportQuery) -> list[InventoryItem]:
        stmt = select(InventoryItem).where(InventoryItem.is_archived.is_(False))
        if query.created_since:
            stmt = stmt.where(InventoryItem.created_at >= query.created_since)
        if query.categories:
            stmt = stmt.where(InventoryItem.category.in_(query.categories))
        if query.statuses:
            stmt = stmt.where(InventoryItem.status.in_(query.statuses))
        result = await self.db.execute(stmt.order_by(func.lower(InventoryItem.name)))
        return list(result.scalars().all())

    async def count_by_category(self, name: str) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(InventoryItem).where(InventoryItem.category == name)
        )
        return result.scalar_one()

    async def rename_category(self, old_name: str, new_name: str) -> int:
        result = await self.db.execute(
            update(InventoryItem)
            .where(InventoryItem.category == old_name)
            .values(category=new_name)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    async def statistics(self) -> InventoryStats:
        active = InventoryItem.is_archived.is_(False)

        totals = (
            await self.db.execute(
                select(func.count(InventoryItem.id), func.coalesce(func.sum(InventoryItem.quantity), 0)).where(active)
            )
        ).one()

        status_rows = (
            await self.db.execute(
                select(InventoryItem.status, func.count()).where(active).group_by(InventoryItem.status)
            )
        ).all()
        by_status = {row[0]: row[1] for row in status_rows}

        category_rows = (
            await self.db.execute(
                select(InventoryItem.category, func.count().label("count"))
                .where(active)
                .group_by(InventoryItem.category)
                .order_by(desc("count"))
            )
        ).all()

        return InventoryStats(
            overview=Overview(total_items=totals[0], total_quantity=int(totals[1])),
            status_breakdown=StatusBreakdown(
                in_stock=by_status.get(StockStatus.IN_STOCK.value, 0),
                low_stock=by_status.get(StockStatus.LOW_STOCK.value, 0),
                out_of_stock=by_status.get(StockStatus.OUT_OF_STOCK.value, 0),
            ),
            category_breakdown=[CategoryCount(category=row[0], count=row[1]) for row in category_rows],
        )


class SqlCategoryRepository(CategoryRepository):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, category_id: UUID) -> Category | None:
        return await self.db.get(Category, category_id)

    async def get_by_name(self, name: str) -> Category | None:
        result = await self.db.execute(select(Category).where(Category.name == name))
        return result.scalar_one_or_none()

    async def list_all(self, include_inactive: bool = False) -> list[Category]:
        query = select(Category).order_by(func.lower(Category.name))
        if not include_inactive:
            query = query.where(Category.is_active.is_(True))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def add(self, category: Category) -> Category:
        self.db.add(category)
        await self.db.flush()
        await self.db.refresh(category)
        return category

    async def update(self, category_id: UUID, values: dict) -> Category | None:
        category = await self.db.get(Category, category_id)
        if not category:
            return None
        for field, value in values.items():
            setattr(category, field, value)
        await self.db.flush()
        await self.db.refresh(category)
        return category

    async def delete(self, category_id: UUID) -> bool:
        result = await self.db.execute(delete(Category).where(Category.id == category_id))
        return result.rowcount > 0


class SqlActivityLogRepository(ActivityLogRepository):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def append(self, entry: ActivityLog) -> ActivityLog:
        self.db.add(entry)
        await self.db.flush()
        return entry

    async def find(self, query: ActivityQuery) -> list[ActivityLog]:
        stmt = select(ActivityLog)
        if query.type:
            stmt = stmt.where(ActivityLog.type == query.type)
        if query.search:
            like = _like(query.search)
            stmt = stmt.where(
                or_(
                    ActivityLog.user.ilike(like, escape="\\"),
                    ActivityLog.item_name.ilike(like, escape="\\"),
                    ActivityLog.description.ilike(like, escape="\\"),
                )
            )
        if query.since:
            stmt = stmt.where(ActivityLog.timestamp >= query.since)
        if query.until:
            stmt = stmt.where(ActivityLog.timestamp < query.until)
        order = desc(ActivityLog.timestamp) if query.newest_first else ActivityLog.timestamp.asc()
        result = await self.db.execute(stmt.order_by(order))
        return list(result.scalars().all())


class SqlUserRepository(UserRepository):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: UUID) -> User | None:
        return await self.db.get(User, user_id)

    async def get_by_username(self, username: str) -> User | None:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(desc(User.created_at)))
        return list(result.scalars().all())

    async def add(self, user: User) -> User:
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def update(self, user_id: UUID, values: dict) -> User | None:
        user = await self.db.get(User, user_id)
        if not user:
            return None
        for field, value in values.items():
            setattr(user, field, value)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def delete(self, user_id: UUID) -> bool:
        result = await self.db.execute(delete(User).where(User.id == user_id))
        return result.rowcount > 0


class SqlUnitOfWork(UnitOfWork):
    def __init__(self, db: AsyncSession):
        self.db = db
        self.inventory = SqlInventoryRepository(db)
        self.categories = SqlCategoryRepository(db)
        self.activity_logs = SqlActivityLogRepository(db)
        self.users = SqlUserRepository(db)

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()


class SqlDataStore(DataStore):
    mode = "database"

    def __init__(self, database: Database):
        self.database = database

    async def connect(self) -> None:
        from stockroom.db.seed import ensure_owner

        await self.database.create_all()
        async with self.session() as uow:
            await ensure_owner(uow)

    async def close(self) -> None:
        await self.database.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[UnitOfWork]:
        async with self.database.session() as db:
            yield SqlUnitOfWork(db)
