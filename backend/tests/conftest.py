"""Shared fixtures: in-memory and SQLite-backed stores, apps bound to them and bearer tokens."""

import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from stockroom.core.config import settings
from stockroom.core.rbac import permissions_for
from stockroom.core.security import create_access_token
from stockroom.db.base import Database
from stockroom.main import create_app
from stockroom.models.mixins import utcnow
from stockroom.models.role import RoleType
from stockroom.models.user import User
from stockroom.repositories.memory import MemoryDataStore
from stockroom.repositories.sql import SqlDataStore


def make_token(user: User) -> str:
    return create_access_token(
        user_id=user.id,
        username=user.username,
        role=user.role,
        permissions=permissions_for(user.role),
    )


def bearer(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user)}"}


@pytest.fixture
def store():
    """Owner account only, no demo catalogue."""
    return MemoryDataStore(seed_demo=False)


@pytest.fixture
def demo_store():
    return MemoryDataStore()


@pytest.fixture
def owner(store) -> User:
    return next(u for u in store.state.users.values() if u.username == settings.OWNER_USERNAME)


@pytest.fixture
def employee(store) -> User:
    now = utcnow()
    user = User(
        id=uuid.uuid4(),
        username="clerk",
        hashed_password="not-a-real-hash",
        full_name="Counter Clerk",
        role=RoleType.EMPLOYEE.value,
        is_active=True,
        created_by=settings.OWNER_USERNAME,
        created_at=now,
        updated_at=now,
    )
    store.state.users[user.id] = user
    return user


@pytest.fixture
def owner_headers(owner):
    return bearer(owner)


@pytest.fixture
def employee_headers(employee):
    return bearer(employee)


@pytest_asyncio.fixture
async def client(store):
    app = create_app(store)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def demo_client(demo_store):
    app = create_app(demo_store)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def demo_owner_headers(demo_store):
    owner = next(u for u in demo_store.state.users.values() if u.role == RoleType.OWNER.value)
    return bearer(owner)


@pytest_asyncio.fixture
async def sql_store(tmp_path):
    """SqlDataStore on a throwaway SQLite file; schema created and owner seeded."""
    store = SqlDataStore(Database(f"sqlite+aiosqlite:///{tmp_path / 'stockroom.db'}"))
    await store.connect()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def sql_client(sql_store):
    app = create_app(sql_store)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def sql_owner_headers(sql_store):
    async with sql_store.session() as uow:
        owner = await uow.users.get_by_username(settings.OWNER_USERNAME)
    return bearer(owner)
