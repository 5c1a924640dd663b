"""Repository interfaces shared by the SQL and in-memory stores.

Services only talk to these. A ``UnitOfWork`` groups the four repositories
for one request; nothing is durable until ``commit()``.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from stockroom.models.activity_log import ActivityLog
from stockroom.models.category import Category
from stockroom.models.inventory import InventoryItem
from stockroom.models.user import User
from stockroom.schemas.stats import InventoryStats


@dataclass
class InventoryQuery:
    """A normalized list request. Build it with ``services.query.build_inventory_query``."""
    page: int = 1
    limit: int = 10
    search: str | None = None
    category: str | None = None
    status: str | None = None
    sort: str = "name"
    descending: bool = False
    archived: bool = False

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class ActivityQuery:
    type: str | None = None
    search: str | None = None
    since: datetime | None = None
    until: datetime | None = None
    newest_first: bool = True


@dataclass
class ReportQuery:
    created_since: datetime | None = None
    categories: list[str] = field(default_factory=list)
    statuses: list[str] = field(default_factory=list)


class InventoryRepository(ABC):
    @abstractmethod
    async def get(self, item_id: UUID) -> InventoryItem | None: ...

    @abstractmethod
    async def get_by_name(self, name: str) -> InventoryItem | None: ...

    @abstractmethod
    async def add(self, item: InventoryItem) -> InventoryItem: ...

    @abstractmethod
    async def update(self, item_id: UUID, values: dict) -> InventoryItem | None:
        """Apply ``values`` to one row in a single write; last write wins per field."""

    @abstractmethod
    async def delete(self, item_id: UUID) -> bool: ...

    @abstractmethod
    async def search(self, query: InventoryQuery) -> tuple[list[InventoryItem], int]:
        """Return one page of matching items and the total match count."""

    @abstractmethod
    async def list_for_report(self, query: ReportQuery) -> list[InventoryItem]: ...

    @abstractmethod
    async def count_by_category(self, name: str) -> int:
        """Count items carrying ``name``, archived ones included."""

    @abstractmethod
    async def rename_category(self, old_name: str, new_name: str) -> int: ...

    @abstractmethod
    async def statistics(self) -> InventoryStats:
        """Aggregates over non-archived items only."""


class CategoryRepository(ABC):
    @abstractmethod
    async def get(self, category_id: UUID) -> Category | None: ...

    @abstractmethod
    async def get_by_name(self, name: str) -> Category | None: ...

    @abstractmethod
    async def list_all(self, include_inactive: bool = False) -> list[Category]: ...

    @abstractmethod
    async def add(self, category: Category) -> Category: ...

    @abstractmethod
    async def update(self, category_id: UUID, values: dict) -> Category | None: ...

    @abstractmethod
    async def delete(self, category_id: UUID) -> bool: ...


class ActivityLogRepository(ABC):
    """Append-only: no update or delete."""

    @abstractmethod
    async def append(self, entry: ActivityLog) -> ActivityLog: ...

    @abstractmethod
    async def find(self, query: ActivityQuery) -> list[ActivityLog]: ...


class UserRepository(ABC):
    @abstractmethod
    async def get(self, user_id: UUID) -> User | None: ...

    @abstractmethod
    async def get_by_username(self, username: str) -> User | None: ...

    @abstractmethod
    async def list_all(self) -> list[User]:
        """All accounts, newest first."""

    @abstractmethod
    async def add(self, user: User) -> User: ...

    @abstractmethod
    async def update(self, user_id: UUID, values: dict) -> User | None: ...

    @abstractmethod
    async def delete(self, user_id: UUID) -> bool: ...


class UnitOfWork(ABC):
    inventory: InventoryRepository
    categories: CategoryRepository
    activity_logs: ActivityLogRepository
    users: UserRepository

    @abstractmethod
    async def commit(self) -> None: ...

    @abstractmethod
    async def rollback(self) -> None: ...


class DataStore(ABC):
    """Process-wide storage handle: started once, shared by every request."""

    mode: str

    async def connect(self) -> None:
        """Prepare the store (schema, seed data). Called from the app lifespan."""

    async def close(self) -> None:
        """Release pooled resources."""

    @abstractmethod
    def session(self) -> AbstractAsyncContextManager[UnitOfWork]: ...
