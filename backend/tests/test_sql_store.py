"""Inventory and category flows against SqlDataStore on a real SQLite engine."""

import uuid

import pytest

from stockroom.db.seed import load_demo_catalogue
from stockroom.repositories.base import ActivityQuery, InventoryQuery
from stockroom.repositories.sql import SqlActivityLogRepository


async def create_item(client, headers, **overrides) -> dict:
    payload = {"name": "Wireless Mouse", "category": "Peripherals", "description": "2.4GHz", "quantity": 10}
    payload.update(overrides)
    resp = await client.post("/inventory", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["item"]


async def stored_items(store) -> list:
    async with store.session() as uow:
        items, _ = await uow.inventory.search(InventoryQuery(limit=100))
        archived, _ = await uow.inventory.search(InventoryQuery(limit=100, archived=True))
    return items + archived


async def stored_activities(store) -> list:
    async with store.session() as uow:
        return await uow.activity_logs.find(ActivityQuery(newest_first=False))


@pytest.fixture
def broken_activity_writes(monkeypatch):
    """Activity rows fail their NOT NULL check on flush, inside the audit transaction."""
    original_append = SqlActivityLogRepository.append

    async def append(self, entry):
        entry.user = None
        return await original_append(self, entry)

    monkeypatch.setattr(SqlActivityLogRepository, "append", append)


# ── Inventory ──────────────────────────────────────

@pytest.mark.asyncio
async def test_create_persists_item_and_activity(sql_client, sql_store, sql_owner_headers):
    """Created item and its item_added entry are both readable from fresh sessions."""
    item = await create_item(sql_client, sql_owner_headers, quantity=3, price=19.99)

    assert item["status"] == "Low Stock"
    assert item["price"] == 19.99
    assert [i.name for i in await stored_items(sql_store)] == ["Wireless Mouse"]
    activities = await stored_activities(sql_store)
    assert [(a.type, a.item_name) for a in activities] == [("item_added", "Wireless Mouse")]


@pytest.mark.asyncio
async def test_failed_activity_write_keeps_mutations(
    sql_client, sql_store, sql_owner_headers, broken_activity_writes
):
    """Every mutation still succeeds and persists when the activity insert fails mid-transaction."""
    item = await create_item(sql_client, sql_owner_headers, name="Hub", quantity=8)
    assert item["status"] == "In Stock"

    resp = await sql_client.put(f"/inventory/{item['id']}", json={"quantity": 0}, headers=sql_owner_headers)
    assert resp.status_code == 200
    assert resp.json()["item"]["status"] == "Out of Stock"

    resp = await sql_client.patch(f"/inventory/{item['id']}/archive", headers=sql_owner_headers)
    assert resp.status_code == 200
    assert resp.json()["item"]["isArchived"] is True

    resp = await sql_client.patch(f"/inventory/{item['id']}/restore", headers=sql_owner_headers)
    assert resp.status_code == 200
    assert resp.json()["item"]["isArchived"] is False

    [stored] = await stored_items(sql_store)
    assert stored.id == uuid.UUID(item["id"])
    assert (stored.quantity, stored.status, stored.is_archived) == (0, "Out of Stock", False)
    assert await stored_activities(sql_store) == []


@pytest.mark.asyncio
async def test_failed_activity_write_keeps_delete(
    sql_client, sql_store, sql_owner_headers, broken_activity_writes
):
    """Delete reports success and the row is gone even though its audit entry was not written."""
    item = await create_item(sql_client, sql_owner_headers)

    resp = await sql_client.delete(f"/inventory/{item['id']}", headers=sql_owner_headers)

    assert resp.status_code == 200
    assert await stored_items(sql_store) == []


@pytest.mark.asyncio
async def test_search_sort_and_pagination(sql_client, sql_owner_headers):
    """Name sort ignores case, numeric sorts treat a missing price as zero, page 2 holds items 11-20."""
    await create_item(sql_client, sql_owner_headers, name="banana", price=3)
    await create_item(sql_client, sql_owner_headers, name="Apple")
    await create_item(sql_client, sql_owner_headers, name="cherry", price=1)

    body = (await sql_client.get("/inventory?sort=name", headers=sql_owner_headers)).json()
    assert [i["name"] for i in body["items"]] == ["Apple", "banana", "cherry"]

    body = (await sql_client.get("/inventory?sort=price&order=desc", headers=sql_owner_headers)).json()
    assert [i["name"] for i in body["items"]] == ["banana", "cherry", "Apple"]

    body = (await sql_client.get("/inventory?search=AN", headers=sql_owner_headers)).json()
    assert [i["name"] for i in body["items"]] == ["banana"]

    for n in range(22):
        await create_item(sql_client, sql_owner_headers, name=f"Item {n:02d}")
    body = (await sql_client.get("/inventory?search=item&page=2&limit=10", headers=sql_owner_headers)).json()
    assert [i["name"] for i in body["items"]] == [f"Item {n}" for n in range(10, 20)]
    assert body["pagination"]["total"] == 22
    assert body["pagination"]["totalPages"] == 3


@pytest.mark.asyncio
async def test_demo_catalogue_stats_and_search(sql_client, sql_store, sql_owner_headers):
    """Group-by statistics and filters over the demo catalogue match the in-memory store."""
    async with sql_store.session() as uow:
        assert await load_demo_catalogue(uow) == 15
        assert await load_demo_catalogue(uow) == 0

    stats = (await sql_client.get("/stats", headers=sql_owner_headers)).json()["stats"]
    assert stats["overview"] == {"totalItems": 15, "totalQuantity": 138}
    assert stats["statusBreakdown"] == {"inStock": 9, "lowStock": 4, "outOfStock": 2}
    counts = [c["count"] for c in stats["categoryBreakdown"]]
    assert counts == sorted(counts, reverse=True)
    assert {"category": "Peripherals", "count": 3} in stats["categoryBreakdown"]

    resp = await sql_client.get("/inventory?search=HDMI&limit=100", headers=sql_owner_headers)
    names = {i["name"] for i in resp.json()["items"]}
    assert names == {"HDMI 2.1 Cable 6ft", "USB-C to HDMI Adapter", "27-inch 4K Monitor"}

    resp = await sql_client.get("/inventory?sort=quantity&order=desc&limit=3", headers=sql_owner_headers)
    assert [i["quantity"] for i in resp.json()["items"]] == [25, 20, 18]


# ── Categories ─────────────────────────────────────

@pytest.mark.asyncio
async def test_rename_cascades_in_one_commit(sql_client, sql_store, sql_owner_headers):
    """Bulk rename updates active and archived items and leaves other categories alone."""
    resp = await sql_client.post("/categories", json={"name": "Audio"}, headers=sql_owner_headers)
    category = resp.json()["category"]
    await create_item(sql_client, sql_owner_headers, name="Speaker", category="Audio")
    shelved = await create_item(sql_client, sql_owner_headers, name="Headphones", category="Audio")
    await create_item(sql_client, sql_owner_headers, name="HDMI Cable", category="Cables")
    await sql_client.patch(f"/inventory/{shelved['id']}/archive", headers=sql_owner_headers)

    resp = await sql_client.put(
        f"/categories/{category['id']}", json={"name": "Sound"}, headers=sql_owner_headers
    )

    assert resp.status_code == 200
    assert resp.json()["itemsUpdated"] == 2
    assert resp.json()["category"]["name"] == "Sound"
    by_name = {i.name: i.category for i in await stored_items(sql_store)}
    assert by_name == {"Speaker": "Sound", "Headphones": "Sound", "HDMI Cable": "Cables"}


@pytest.mark.asyncio
async def test_delete_category_in_use(sql_client, sql_owner_headers):
    """A category still referenced by an item is refused with its item count."""
    resp = await sql_client.post("/categories", json={"name": "Audio"}, headers=sql_owner_headers)
    category = resp.json()["category"]
    await create_item(sql_client, sql_owner_headers, category="Audio")

    resp = await sql_client.delete(f"/categories/{category['id']}", headers=sql_owner_headers)

    assert resp.status_code == 400
    assert resp.json()["itemCount"] == 1
    resp = await sql_client.get(f"/categories/{category['id']}", headers=sql_owner_headers)
    assert resp.status_code == 200
