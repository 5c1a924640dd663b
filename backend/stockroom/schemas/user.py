"""Account management schemas."""

from typing import Annotated

from pydantic import StringConstraints

from stockroom.models.role import RoleType
from stockroom.schemas.auth import UserOut
from stockroom.schemas.common import CamelModel

Username = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")
]
FullName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


class UserCreate(CamelModel):
    username: Username
    full_name: FullName
    role: RoleType = RoleType.EMPLOYEE


class UserUpdate(CamelModel):
    full_name: FullName | None = None
    is_active: bool | None = None


class UserResponse(CamelModel):
    success: bool = True
    message: str | None = None
    user: UserOut


class UserCreatedResponse(UserResponse):
    temporary_password: str


class UserListResponse(CamelModel):
    success: bool = True
    users: list[UserOut]
