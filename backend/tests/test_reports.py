"""Tests for the inventory report dataset and its CSV/PDF exports."""

import csv
import io
from datetime import datetime, timedelta, timezone

import pytest

from stockroom.services.reports import REPORT_COLUMNS, created_since, split_csv

NOW = datetime(2025, 3, 31, 18, 45, tzinfo=timezone.utc)


def test_split_csv():
    """Comma lists drop blanks and whitespace."""
    assert split_csv("Audio, Cables,,  ") == ["Audio", "Cables"]
    assert split_csv("") == []
    assert split_csv(None) == []


@pytest.mark.parametrize(
    "date_range, expected",
    [
        ("today", datetime(2025, 3, 31, tzinfo=timezone.utc)),
        ("week", datetime(2025, 3, 24, tzinfo=timezone.utc)),
        # clamped to the last day of February
        ("month", datetime(2025, 2, 28, tzinfo=timezone.utc)),
        ("year", datetime(2024, 3, 31, tzinfo=timezone.utc)),
        ("all", None),
        (None, None),
    ],
)
def test_created_since(date_range, expected):
    """Report windows step back from UTC midnight."""
    assert created_since(date_range, NOW) == expected


@pytest.mark.asyncio
async def test_report_dataset(demo_client, demo_owner_headers):
    """Full report lists items by name with the summary counts."""
    resp = await demo_client.get("/reports/inventory", headers=demo_owner_headers)

    assert resp.status_code == 200
    body = resp.json()
    names = [row["name"] for row in body["items"]]
    assert names == sorted(names, key=str.casefold)
    assert body["summary"] == {
        "totalItems": 15,
        "totalCategories": 8,
        "totalQuantity": 138,
        "inStock": 9,
        "lowStock": 4,
        "outOfStock": 2,
    }
    assert body["filters"] == {"dateRange": "all", "categories": [], "statuses": []}
    assert "generatedAt" in body


@pytest.mark.asyncio
async def test_report_filters(demo_client, demo_owner_headers):
    """Category, status and window filters apply together."""
    resp = await demo_client.get(
        "/reports/inventory?categories=Audio,Cables&statuses=Out of Stock&dateRange=today",
        headers=demo_owner_headers,
    )

    body = resp.json()
    assert {row["name"] for row in body["items"]} == {"HDMI 2.1 Cable 6ft", "Bluetooth Speaker"}
    assert body["filters"] == {
        "dateRange": "today",
        "categories": ["Audio", "Cables"],
        "statuses": ["Out of Stock"],
    }


@pytest.mark.asyncio
async def test_report_excludes_archived_and_old_items(demo_client, demo_store, demo_owner_headers):
    """Archived items and items outside the window are left out."""
    items = list(demo_store.state.items.values())
    items[0].is_archived = True
    items[1].created_at = datetime.now(timezone.utc) - timedelta(days=400)

    body = (await demo_client.get("/reports/inventory?dateRange=year", headers=demo_owner_headers)).json()

    names = {row["name"] for row in body["items"]}
    assert items[0].name not in names
    assert items[1].name not in names
    assert body["summary"]["totalItems"] == 13


@pytest.mark.asyncio
async def test_csv_export(demo_client, demo_owner_headers):
    """CSV export has the header row and one row per item."""
    resp = await demo_client.get("/reports/inventory/csv?categories=Storage", headers=demo_owner_headers)

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert 'filename="inventory-report-' in resp.headers["content-disposition"]
    rows = list(csv.reader(io.StringIO(resp.text)))
    assert rows[0] == REPORT_COLUMNS
    assert [row[0] for row in rows[1:]] == ["1TB SSD Drive", "32GB USB 3.0 Flash Drive"]
    assert rows[1][2] == "12"
    assert rows[1][3] == "In Stock"


@pytest.mark.asyncio
async def test_pdf_export(demo_client, demo_owner_headers):
    """PDF export is served as an attachment."""
    resp = await demo_client.get("/reports/inventory/pdf", headers=demo_owner_headers)

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.headers["content-disposition"].endswith('.pdf"')
    assert resp.content.startswith(b"%PDF")
