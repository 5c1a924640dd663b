"""Activity log schemas."""

from datetime import datetime
from typing import Annotated, Literal
from uuid import UUID

from pydantic import StringConstraints

from stockroom.models.activity_log import ActivityType
from stockroom.schemas.common import CamelModel

Required = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

DateWindow = Literal["today", "yesterday", "week", "all"]


class ActivityCreate(CamelModel):
    type: ActivityType
    user: Required
    item_name: Required
    description: Required


class ActivityOut(CamelModel):
    id: UUID
    type: ActivityType
    user: str
    item_name: str
    description: str
    timestamp: datetime


class ActivityListResponse(CamelModel):
    success: bool = True
    activities: list[ActivityOut]


class ActivityResponse(CamelModel):
    success: bool = True
    message: str = "Activity logged successfully"
    activity: ActivityOut
