"""Audit log sink: append-only activity records and their filtered listing.

Two entry points write here:

* ``append`` - used by ``POST /activity-log``; errors propagate.
* ``record`` - used after an inventory mutation has already been committed;
  any failure is logged and swallowed so it can never undo or fail the
  mutation that triggered it. The API gives the sink its own unit of work
  so the rollback only discards the activity row.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone

from stockroom.core.errors import ValidationError
from stockroom.models.activity_log import ActivityLog, ActivityType
from stockroom.models.mixins import utcnow
from stockroom.repositories.base import ActivityQuery, UnitOfWork

logger = logging.getLogger(__name__)


def date_window(name: str | None, now: datetime | None = None) -> tuple[datetime | None, datetime | None]:
    """Translate a relative window name into ``[since, until)`` bounds (UTC days)."""
    now = now or utcnow()
    midnight = now.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    if name == "today":
        return midnight, None
    if name == "yesterday":
        return midnight - timedelta(days=1), midnight
    if name == "week":
        return midnight - timedelta(days=7), None
    return None, None


class AuditLogSink:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def append(
        self,
        type: ActivityType | str,
        user: str,
        item_name: str,
        description: str,
        timestamp: datetime | None = None,
    ) -> ActivityLog:
        entry = ActivityLog(
            id=uuid.uuid4(),
            type=ActivityType(type).value,
            user=user,
            item_name=item_name,
            description=description,
            timestamp=timestamp or utcnow(),
        )
        await self.uow.activity_logs.append(entry)
        await self.uow.commit()
        return entry

    async def record(self, type: ActivityType, user: str, item_name: str, description: str) -> ActivityLog | None:
        try:
            entry = await self.append(type, user, item_name, description)
        except Exception:
            logger.exception("Failed to record %s activity for %r", ActivityType(type).value, item_name)
            try:
                await self.uow.rollback()
            except Exception:
                logger.exception("Rollback after failed activity write also failed")
            return None
        logger.debug("Activity logged: %s %r by %s", entry.type, item_name, user)
        return entry

    async def list(
        self,
        type: str | None = None,
        search: str | None = None,
        date_range: str | None = None,
        order: str | None = None,
    ) -> list[ActivityLog]:
        type_value = None
        if type and type != "all":
            try:
                type_value = ActivityType(type).value
            except ValueError:
                raise ValidationError("Invalid activity type", errors={"type": f"Unknown activity type {type!r}"})

        since, until = date_window(date_range)
        query = ActivityQuery(
            type=type_value,
            search=(search or "").strip() or None,
            since=since,
            until=until,
            newest_first=(order or "desc").lower() != "asc",
        )
        return await self.uow.activity_logs.find(query)
