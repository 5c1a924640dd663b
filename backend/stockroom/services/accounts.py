"""Staff accounts: login, password change and owner-managed user CRUD."""

import logging
import uuid
from uuid import UUID

from stockroom.core.config import settings
from stockroom.core.errors import AuthError, ForbiddenError, NotFoundError, ValidationError
from stockroom.core.rbac import permissions_for
from stockroom.core.security import (
    create_access_token,
    dummy_verify,
    generate_password,
    hash_password,
    verify_password,
)
from stockroom.models.mixins import utcnow
from stockroom.models.user import User
from stockroom.repositories.base import UnitOfWork
from stockroom.schemas.auth import ChangePasswordRequest, LoginRequest
from stockroom.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def _require(self, user_id: UUID) -> User:
        user = await self.uow.users.get(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    # ── Authentication ──────────────────────────────

    async def login(self, data: LoginRequest) -> tuple[User, str]:
        """Check credentials and issue an access token."""
        username = data.username.strip()
        if not username or not data.password:
            raise ValidationError("Username and password are required")

        user = await self.uow.users.get_by_username(username)
        if not user:
            dummy_verify()
            logger.info("Login failed for unknown user %r", username)
            raise AuthError("Invalid username or password")
        if not verify_password(data.password, user.hashed_password):
            logger.info("Login failed for %r: wrong password", username)
            raise AuthError("Invalid username or password")
        if not user.is_active:
            raise ForbiddenError("Account has been deactivated. Contact administrator.")

        token = create_access_token(
            user_id=user.id,
            username=user.username,
            role=user.role,
            permissions=permissions_for(user.role),
        )
        logger.info("User %r logged in", user.username)
        return user, token

    async def change_password(self, user_id: UUID, data: ChangePasswordRequest) -> None:
        if not data.current_password or not data.new_password:
            raise ValidationError("All fields are required")
        if len(data.new_password) < settings.PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"New password must be at least {settings.PASSWORD_MIN_LENGTH} characters"
            )
        if data.confirm_password is not None and data.confirm_password != data.new_password:
            raise ValidationError("New password and confirmation do not match")

        user = await self._require(user_id)
        if not verify_password(data.current_password, user.hashed_password):
            raise AuthError("Current password is incorrect")
        if data.new_password == data.current_password:
            raise ValidationError("New password must be different from current password")

        await self.uow.users.update(
            user_id, {"hashed_password": hash_password(data.new_password), "updated_at": utcnow()}
        )
        await self.uow.commit()
        logger.info("Password changed for %r", user.username)

    # ── User management ─────────────────────────────

    async def list(self) -> list[User]:
        return await self.uow.users.list_all()

    async def create(self, data: UserCreate, created_by: str) -> tuple[User, str]:
        """Create an account with a generated password; the plain password is returned once."""
        if await self.uow.users.get_by_username(data.username):
            raise ValidationError("Username already exists")

        password = generate_password()
        now = utcnow()
        user = User(
            id=uuid.uuid4(),
            username=data.username,
            hashed_password=hash_password(password),
            full_name=data.full_name,
            role=data.role.value,
            is_active=True,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        user = await self.uow.users.add(user)
        await self.uow.commit()
        logger.info("User %r (%s) created by %s", user.username, user.role, created_by)
        return user, password

    async def update(self, user_id: UUID, data: UserUpdate) -> User:
        user = await self._require(user_id)
        values = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        if user.is_owner and values.get("is_active") is False:
            raise ForbiddenError("Cannot deactivate owner account")
        values["updated_at"] = utcnow()

        user = await self.uow.users.update(user_id, values)
        if not user:
            raise NotFoundError("User not found")
        await self.uow.commit()
        logger.info("User %r updated (%s)", user.username, ", ".join(sorted(values)))
        return user

    async def delete(self, user_id: UUID) -> None:
        user = await self._require(user_id)
        if user.is_owner:
            raise ForbiddenError("Cannot delete owner account")
        if not await self.uow.users.delete(user_id):
            raise NotFoundError("User not found")
        await self.uow.commit()
        logger.info("User %r deleted", user.username)
