"""Seed data: the owner account and a demo catalogue.

Run against the configured database with ``python -m stockroom.db.seed``
(add ``--demo`` to also load the sample categories and items).
"""

import argparse
import asyncio
import logging
import uuid
from datetime import datetime, timezone

from stockroom.core.config import settings
from stockroom.core.security import hash_password
from stockroom.models.category import Category
from stockroom.models.inventory import InventoryItem, stock_status_for
from stockroom.models.mixins import utcnow
from stockroom.models.role import RoleType
from stockroom.models.user import User
from stockroom.repositories.base import UnitOfWork

logger = logging.getLogger(__name__)

# name, description, color, icon, is_active
DEMO_CATEGORIES = [
    ("Electronics", "Computer and electronic equipment", "#3b82f6", "cpu", True),
    ("Peripherals", "Input and output devices", "#10b981", "mouse", True),
    ("Audio", "Sound equipment and accessories", "#6366f1", "headphones", True),
    ("Storage", "Data storage solutions", "#f97316", "hard-drive", True),
    ("Cables", "Connectivity cables and adapters", "#8b5cf6", "cable", True),
    ("Networking", "Network equipment and accessories", "#14b8a6", "wifi", True),
    ("Components", "Internal computer components", "#ec4899", "chip", True),
    ("Software", "Software licenses and products", "#f43f5e", "code", False),
]

# name, quantity, category, description, serial, price, supplier, last restocked
DEMO_ITEMS = [
    ("27-inch 4K Monitor", 20, "Electronics", "Ultra HD 27-inch monitor with HDMI and DisplayPort",
     "MON-4K-27-001", 349.99, "Tech Supplies Inc.", "2025-08-15"),
    ("Intel i7 Processor", 10, "Components", "11th Gen Intel Core i7 desktop processor",
     "CPU-I7-11-001", 329.99, "Tech Supplies Inc.", "2025-09-01"),
    ("RGB Mechanical Keyboard", 5, "Peripherals", "Mechanical gaming keyboard with RGB backlighting",
     "KEY-MEC-RGB-001", 89.99, "Gamer Gear Ltd.", "2025-08-20"),
    ("Wireless Gaming Mouse", 15, "Peripherals", "Ergonomic wireless mouse with adjustable DPI",
     "MOU-WL-GAM-001", 59.99, "Gamer Gear Ltd.", "2025-09-05"),
    ("Noise Cancelling Headphones", 8, "Audio", "Over-ear wireless headphones with active noise cancellation",
     "HPH-NC-BT-001", 199.99, "Sound Solutions", "2025-08-25"),
    ("32GB USB 3.0 Flash Drive", 3, "Storage", "High-speed USB 3.0 flash drive, 32GB capacity",
     "USB-32-3.0-001", 24.99, "Memory Masters", "2025-08-10"),
    ("HDMI 2.1 Cable 6ft", 0, "Cables", "6-foot HDMI 2.1 cable for 4K/8K video",
     "CBL-HDMI-2.1-001", 19.99, "Cable Connections", "2025-07-30"),
    ("1TB SSD Drive", 12, "Storage", "1TB solid state drive, SATA interface",
     "SSD-1TB-SATA-001", 129.99, "Memory Masters", "2025-09-10"),
    ("WiFi 6 Router", 7, "Networking", "Dual-band WiFi 6 router with Gigabit Ethernet",
     "NET-WIFI6-RTR-001", 149.99, "Network Pro", "2025-08-28"),
    ("Graphics Card RTX 3070", 2, "Components", "NVIDIA RTX 3070 8GB graphics card",
     "GPU-RTX3070-001", 599.99, "Tech Supplies Inc.", "2025-08-05"),
    ("USB-C to HDMI Adapter", 18, "Cables", "USB Type-C to HDMI adapter for displays",
     "CBL-USBC-HDMI-001", 29.99, "Cable Connections", "2025-09-12"),
    ("Windows 11 Pro License", 25, "Software", "Windows 11 Professional Edition license key",
     "SW-WIN11-PRO-001", 199.99, "Software Solutions", "2025-09-15"),
    ("Webcam 4K", 9, "Peripherals", "4K USB webcam with microphone",
     "CAM-4K-USB-001", 79.99, "Vision Tech", "2025-08-22"),
    ("16GB RAM Kit (2x8GB)", 4, "Components", "16GB DDR4 RAM kit, two 8GB modules",
     "RAM-16-DDR4-001", 89.99, "Memory Masters", "2025-08-18"),
    ("Bluetooth Speaker", 0, "Audio", "Portable Bluetooth speaker with 20-hour battery life",
     "SPK-BT-20HR-001", 69.99, "Sound Solutions", "2025-07-25"),
]


def demo_categories() -> list[Category]:
    now = utcnow()
    return [
        Category(
            id=uuid.uuid4(),
            name=name,
            description=description,
            color=color,
            icon=icon,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        for name, description, color, icon, is_active in DEMO_CATEGORIES
    ]


def demo_items() -> list[InventoryItem]:
    now = utcnow()
    items = []
    for name, quantity, category, description, serial, price, supplier, restocked in DEMO_ITEMS:
        items.append(
            InventoryItem(
                id=uuid.uuid4(),
                name=name,
                quantity=quantity,
                category=category,
                status=stock_status_for(quantity).value,
                description=description,
                serial_number=serial,
                price=price,
                supplier=supplier,
                last_restocked=datetime.fromisoformat(restocked).replace(tzinfo=timezone.utc),
                image=None,
                is_archived=False,
                archived_at=None,
                archived_by=None,
                created_at=now,
                updated_at=now,
            )
        )
    return items


def owner_account() -> User:
    now = utcnow()
    return User(
        id=uuid.uuid4(),
        username=settings.OWNER_USERNAME,
        hashed_password=hash_password(settings.OWNER_PASSWORD),
        full_name=settings.OWNER_FULL_NAME,
        role=RoleType.OWNER.value,
        is_active=True,
        created_by=None,
        created_at=now,
        updated_at=now,
    )


async def ensure_owner(uow: UnitOfWork) -> User:
    """Create the owner account unless one with the configured username exists."""
    existing = await uow.users.get_by_username(settings.OWNER_USERNAME)
    if existing:
        return existing
    owner = await uow.users.add(owner_account())
    await uow.commit()
    logger.info("Owner account %r created", owner.username)
    return owner


async def load_demo_catalogue(uow: UnitOfWork) -> int:
    """Add the demo categories and items that are not there yet; returns items added."""
    added = 0
    for category in demo_categories():
        if not await uow.categories.get_by_name(category.name):
            await uow.categories.add(category)
    for item in demo_items():
        if await uow.inventory.get_by_name(item.name):
            continue
        await uow.inventory.add(item)
        added += 1
    await uow.commit()
    return added


async def main(demo: bool) -> None:
    from stockroom.db.base import Database
    from stockroom.repositories.sql import SqlDataStore

    if not settings.DATABASE_URL:
        raise SystemExit("DATABASE_URL is not set")

    store = SqlDataStore(Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO))
    try:
        await store.connect()
        if demo:
            async with store.session() as uow:
                added = await load_demo_catalogue(uow)
            logger.info("Loaded %d demo items", added)
    finally:
        await store.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the Stockroom database")
    parser.add_argument("--demo", action="store_true", help="also load the demo catalogue")
    args = parser.parse_args()
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL))
    asyncio.run(main(args.demo))
