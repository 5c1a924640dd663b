"""In-memory repositories: the offline/demo store used when no DATABASE_URL is set.

Objects are plain (session-less) ORM instances kept in dicts. Writes are
visible immediately, so ``commit``/``rollback`` are no-ops.
"""

import logging
from collections import Counter
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from uuid import UUID

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

EPOCH = datetime.min.replace(tzinfo=timezone.utc)
NUMERIC_FIELDS = {"quantity", "price"}
DATETIME_FIELDS = {"created_at", "updated_at", "archived_at"}


def _contains(value: str | None, term: str) -> bool:
    return term in (value or "").casefold()


def _matches(item: InventoryItem, term: str) -> bool:
    return _contains(item.name, term) or _contains(item.category, term) or _contains(item.description, term)


def _sort_key(field: str):
    if field in NUMERIC_FIELDS:
        return lambda obj: float(getattr(obj, field) or 0)
    if field in DATETIME_FIELDS:
        return lambda obj: getattr(obj, field) or EPOCH
    return lambda obj: ((getattr(obj, field) or "").casefold(), getattr(obj, field) or "")


def _apply(obj, values: dict):
    for key, value in values.items():
        setattr(obj, key, value)
    return obj


class MemoryState:
    def __init__(self):
        self.items: dict[UUID, InventoryItem] = {}
        self.categories: dict[UUID, Category] = {}
        self.activity_logs: list[ActivityLog] = []
        self.users: dict[UUID, User] = {}


class MemoryInventoryRepository(InventoryRepository):
    def __init__(self, state: MemoryState):
        self.state = state

    async def get(self, item_id: UUID) -> InventoryItem | None:
        return self.state.items.get(item_id)

    async def get_by_name(self, name: str) -> InventoryItem | None:
        return next((i for i in self.state.items.values() if i.name == name), None)

    async def add(self, item: InventoryItem) -> InventoryItem:
        self.state.items[item.id] = item
        return item

    async def update(self, item_id: UUID, values: dict) -> InventoryItem | None:
        item = self.state.items.get(item_id)
        return _apply(item, values) if item else None

    async def delete(self, item_id: UUID) -> bool:
        return self.state.items.pop(item_id, None) is not None

    async def search(self, query: InventoryQuery) -> tuple[list[InventoryItem], int]:
        items = [i for i in self.state.items.values() if bool(i.is_archived) == query.archived]
        if query.search:
            term = query.search.casefold()
            items = [i for i in items if _matches(i, term)]
        if query.category:
            items = [i for i in items if i.category == query.category]
        if query.status:
            items = [i for i in items if i.status == query.status]
        items.sort(key=_sort_key(query.sort), reverse=query.descending)
        return items[query.offset:query.offset + query.limit], len(items)

    async def list_for_report(self, query: ReportQuery) -> list[InventoryItem]:
        items = [i for i in self.state.items.values() if not i.is_archived]
        if query.created_since:
            items = [i for i in items if i.created_at and i.created_at >= query.created_since]
        if query.categories:
            items = [i for i in items if i.category in query.categories]
        if query.statuses:
            items = [i for i in items if i.status in query.statuses]
        return sorted(items, key=_sort_key("name"))

    async def count_by_category(self, name: str) -> int:
        return sum(1 for i in self.state.items.values() if i.category == name)

    async def rename_category(self, old_name: str, new_name: str) -> int:
        renamed = [i for i in self.state.items.values() if i.category == old_name]
        for item in renamed:
            item.category = new_name
        return len(renamed)

    async def statistics(self) -> InventoryStats:
        active = [i for i in self.state.items.values() if not i.is_archived]
        by_status = Counter(i.status for i in active)
        by_category = Counter(i.category for i in active)
        return InventoryStats(
            overview=Overview(
                total_items=len(active),
                total_quantity=sum(i.quantity or 0 for i in active),
            ),
            status_breakdown=StatusBreakdown(
                in_stock=by_status[StockStatus.IN_STOCK.value],
                low_stock=by_status[StockStatus.LOW_STOCK.value],
                out_of_stock=by_status[StockStatus.OUT_OF_STOCK.value],
            ),
            category_breakdown=[
                CategoryCount(category=name, count=count)
                for name, count in by_category.most_common()
            ],
        )


class MemoryCategoryRepository(CategoryRepository):
    def __init__(self, state: MemoryState):
        self.state = state

    async def get(self, category_id: UUID) -> Category | None:
        return self.state.categories.get(category_id)

    async def get_by_name(self, name: str) -> Category | None:
        return next((c for c in self.state.categories.values() if c.name == name), None)

    async def list_all(self, include_inactive: bool = False) -> list[Category]:
        categories = [c for c in self.state.categories.values() if include_inactive or c.is_active]
        return sorted(categories, key=_sort_key("name"))

    async def add(self, category: Category) -> Category:
        self.state.categories[category.id] = category
        return category

    async def update(self, category_id: UUID, values: dict) -> Category | None:
        category = self.state.categories.get(category_id)
        return _apply(category, values) if category else None

    async def delete(self, category_id: UUID) -> bool:
        return self.state.categories.pop(category_id, None) is not None


class MemoryActivityLogRepository(ActivityLogRepository):
    def __init__(self, state: MemoryState):
        self.state = state

    async def append(self, entry: ActivityLog) -> ActivityLog:
        self.state.activity_logs.append(entry)
        return entry

    async def find(self, query: ActivityQuery) -> list[ActivityLog]:
        entries = list(self.state.activity_logs)
        if query.type:
            entries = [e for e in entries if e.type == query.type]
        if query.search:
            term = query.search.casefold()
            entries = [
                e for e in entries
                if _contains(e.user, term) or _contains(e.item_name, term) or _contains(e.description, term)
            ]
        if query.since:
            entries = [e for e in entries if e.timestamp >= query.since]
        if query.until:
            entries = [e for e in entries if e.timestamp < query.until]
        return sorted(entries, key=lambda e: e.timestamp, reverse=query.newest_first)


class MemoryUserRepository(UserRepository):
    def __init__(self, state: MemoryState):
        self.state = state

    async def get(self, user_id: UUID) -> User | None:
        return self.state.users.get(user_id)

    async def get_by_username(self, username: str) -> User | None:
        return next((u for u in self.state.users.values() if u.username == username), None)

    async def list_all(self) -> list[User]:
        return sorted(self.state.users.values(), key=lambda u: u.created_at, reverse=True)

    async def add(self, user: User) -> User:
        self.state.users[user.id] = user
        return user

    async def update(self, user_id: UUID, values: dict) -> User | None:
        user = self.state.users.get(user_id)
        return _apply(user, values) if user else None

    async def delete(self, user_id: UUID) -> bool:
        return self.state.users.pop(user_id, None) is not None


class MemoryUnitOfWork(UnitOfWork):
    def __init__(self, state: MemoryState):
        self.inventory = MemoryInventoryRepository(state)
        self.categories = MemoryCategoryRepository(state)
        self.activity_logs = MemoryActivityLogRepository(state)
        self.users = MemoryUserRepository(state)

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


class MemoryDataStore(DataStore):
    """Demo store. Seeded synchronously so it is usable before the lifespan runs."""

    mode = "demo"

    def __init__(self, *, seed_demo: bool = True, seed_owner: bool = True):
        from stockroom.db import seed

        self.state = MemoryState()
        if seed_owner:
            owner = seed.owner_account()
            self.state.users[owner.id] = owner
        if seed_demo:
            for category in seed.demo_categories():
                self.state.categories[category.id] = category
            for item in seed.demo_items():
                self.state.items[item.id] = item

    async def connect(self) -> None:
        logger.warning("DATABASE_URL not set: serving in-memory demo data")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[UnitOfWork]:
        yield MemoryUnitOfWork(self.state)
