"""Append-only activity log."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import String, DateTime, Uuid, Index
from sqlalchemy.orm import Mapped, mapped_column

from stockroom.db.base import Base
from stockroom.models.mixins import utcnow


class ActivityType(str, enum.Enum):
    ITEM_ADDED = "item_added"
    ITEM_UPDATED = "item_updated"
    ITEM_DELETED = "item_deleted"
    ITEM_ARCHIVED = "item_archived"
    ITEM_RESTORED = "item_restored"


class ActivityLog(Base):
    __tablename__ = "activity_logs"
    __table_args__ = (
        Index("ix_activity_logs_type_timestamp", "type", "timestamp"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    user: Mapped[str] = mapped_column(String(255), nullable=False)
    item_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    description: Mapped[str] = mapped_column(String(1000), nullable=False, default="")
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<ActivityLog {self.type} {self.item_name!r} by {self.user}>"
