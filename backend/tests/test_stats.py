"""Tests for aggregate statistics."""

import pytest


@pytest.mark.asyncio
async def test_stats_over_demo_catalogue(demo_client, demo_owner_headers):
    """Totals and breakdowns over the demo catalogue."""
    resp = await demo_client.get("/stats", headers=demo_owner_headers)

    assert resp.status_code == 200
    stats = resp.json()["stats"]
    assert stats["overview"] == {"totalItems": 15, "totalQuantity": 138}
    assert stats["statusBreakdown"] == {"inStock": 9, "lowStock": 4, "outOfStock": 2}
    counts = [c["count"] for c in stats["categoryBreakdown"]]
    assert counts == sorted(counts, reverse=True)
    assert {"category": "Peripherals", "count": 3} in stats["categoryBreakdown"]


@pytest.mark.asyncio
async def test_stats_exclude_archived(demo_client, demo_store, demo_owner_headers):
    """Archived items drop out of the statistics."""
    keyboard = next(i for i in demo_store.state.items.values() if i.name == "RGB Mechanical Keyboard")
    await demo_client.patch(f"/inventory/{keyboard.id}/archive", headers=demo_owner_headers)

    stats = (await demo_client.get("/stats", headers=demo_owner_headers)).json()["stats"]

    assert stats["overview"] == {"totalItems": 14, "totalQuantity": 133}
    assert stats["statusBreakdown"]["lowStock"] == 3


@pytest.mark.asyncio
async def test_stats_empty_store(client, employee_headers):
    """An empty store reports zeros and no categories."""
    stats = (await client.get("/stats", headers=employee_headers)).json()["stats"]
    assert stats["overview"] == {"totalItems": 0, "totalQuantity": 0}
    assert stats["categoryBreakdown"] == []
