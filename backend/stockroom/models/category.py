"""Category model - an item's category is a copy of this name, not a foreign key."""

from sqlalchemy import String, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from stockroom.db.base import Base
from stockroom.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin

DEFAULT_CATEGORY_COLOR = "#3b82f6"


class Category(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(String(200))
    color: Mapped[str] = mapped_column(String(7), default=DEFAULT_CATEGORY_COLOR, nullable=False)
    icon: Mapped[str | None] = mapped_column(String(50))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Category {self.name}>"
