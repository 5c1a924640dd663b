"""User (staff account) model."""

from sqlalchemy import String, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from stockroom.db.base import Base
from stockroom.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin
from stockroom.models.role import RoleType


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), default=RoleType.EMPLOYEE.value, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_by: Mapped[str | None] = mapped_column(String(50))

    @property
    def is_owner(self) -> bool:
        return self.role == RoleType.OWNER.value

    def __repr__(self) -> str:
        return f"<User {self.username} ({self.role})>"
