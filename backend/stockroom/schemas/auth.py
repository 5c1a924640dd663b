"""Auth request/response schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from stockroom.schemas.common import CamelModel


# ── Login ──────────────────────────────────────────
class LoginRequest(CamelModel):
    username: str = ""
    password: str = ""


class UserOut(CamelModel):
    """Account as shown to clients: never carries a password or hash."""
    id: UUID
    username: str
    full_name: str
    role: str
    is_active: bool
    created_by: str | None = None
    created_at: datetime
    updated_at: datetime


class LoginResponse(CamelModel):
    success: bool = True
    message: str = "Login successful"
    user: UserOut
    access_token: str
    token_type: str = "bearer"


# ── Change password ────────────────────────────────
class ChangePasswordRequest(CamelModel):
    current_password: str = ""
    new_password: str = ""
    confirm_password: str | None = None


# ── Current User ───────────────────────────────────
class CurrentUser(CamelModel):
    id: UUID
    username: str
    role: str
    permissions: list[str] = Field(default_factory=list)

    @property
    def is_owner(self) -> bool:
        return self.role == "owner"
