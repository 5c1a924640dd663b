"""Unit tests for the SQLAlchemy repositories, with the session mocked out."""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from stockroom.models.inventory import InventoryItem
from stockroom.repositories.base import InventoryQuery
from stockroom.repositories.sql import SqlInventoryRepository, SqlUnitOfWork, _escape_like


def test_escape_like():
    """LIKE wildcards in search terms are escaped."""
    assert _escape_like("100%_off\\") == "100\\%\\_off\\\\"


@pytest.mark.asyncio
async def test_update_missing_row_returns_none():
    """Updating a missing row returns None without flushing."""
    db = AsyncMock()
    db.get.return_value = None

    result = await SqlInventoryRepository(db).update(uuid.uuid4(), {"quantity": 1})

    assert result is None
    db.flush.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_applies_values_without_committing():
    """Repository updates flush but leave the commit to the caller."""
    item = InventoryItem(id=uuid.uuid4(), name="Hub", quantity=8, status="In Stock")
    db = AsyncMock()
    db.add = MagicMock()
    db.get.return_value = item

    result = await SqlInventoryRepository(db).update(item.id, {"quantity": 2, "status": "Low Stock"})

    assert result is item
    assert (item.quantity, item.status) == (2, "Low Stock")
    db.flush.assert_awaited_once()
    db.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_search_returns_page_and_total():
    """Search runs a count and a page query."""
    item = MagicMock()
    count_result = MagicMock()
    count_result.scalar_one.return_value = 11
    items_result = MagicMock()
    items_result.scalars.return_value.all.return_value = [item]

    db = AsyncMock()
    db.execute.side_effect = [count_result, items_result]

    items, total = await SqlInventoryRepository(db).search(
        InventoryQuery(page=2, limit=10, search="mo%", sort="price", descending=True)
    )

    assert items == [item]
    assert total == 11
    assert db.execute.await_count == 2


@pytest.mark.asyncio
async def test_unit_of_work_delegates_to_session():
    """Commit and rollback go straight to the session."""
    db = AsyncMock()
    uow = SqlUnitOfWork(db)

    await uow.commit()
    await uow.rollback()

    db.commit.assert_awaited_once()
    db.rollback.assert_awaited_once()
