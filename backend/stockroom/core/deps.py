"""Dependency injection: auth, RBAC enforcement, data store and services."""

from collections.abc import AsyncIterator
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from stockroom.core.errors import AuthError, ForbiddenError
from stockroom.core.security import decode_access_token
from stockroom.repositories.base import DataStore, UnitOfWork
from stockroom.schemas.auth import CurrentUser
from stockroom.services.accounts import AccountService
from stockroom.services.audit import AuditLogSink
from stockroom.services.categories import CategoryService
from stockroom.services.inventory import InventoryService
from stockroom.services.reports import ReportService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/login")


def get_store(request: Request) -> DataStore:
    return request.app.state.store


async def get_uow(store: DataStore = Depends(get_store)) -> AsyncIterator[UnitOfWork]:
    """One unit of work (one DB session) per request."""
    async with store.session() as uow:
        yield uow


async def get_current_user(token: str = Depends(oauth2_scheme)) -> CurrentUser:
    """Decode JWT and return CurrentUser. Raises 401 on invalid/expired token."""
    try:
        payload = decode_access_token(token)
        user_id = payload.get("sub")
        if user_id is None:
            raise AuthError("Could not validate credentials")
        return CurrentUser(
            id=UUID(user_id),
            username=payload["username"],
            role=payload["role"],
            permissions=payload.get("permissions", []),
        )
    except (JWTError, KeyError, ValueError):
        raise AuthError("Could not validate credentials")


def require_permission(*required: str):
    """Dependency factory: checks the user has ALL required permissions."""

    async def checker(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        missing = [p for p in required if p not in user.permissions]
        if missing:
            raise ForbiddenError(f"Missing permissions: {', '.join(missing)}")
        return user

    return checker


# ── Services ───────────────────────────────────────

async def get_audit_uow(store: DataStore = Depends(get_store)) -> AsyncIterator[UnitOfWork]:
    """Audit writes get their own session.

    Rolling back a failed activity write must not expire rows the request
    session has already committed.
    """
    async with store.session() as uow:
        yield uow


def get_audit_sink(uow: UnitOfWork = Depends(get_audit_uow)) -> AuditLogSink:
    return AuditLogSink(uow)


def get_inventory_service(
    uow: UnitOfWork = Depends(get_uow),
    audit: AuditLogSink = Depends(get_audit_sink),
) -> InventoryService:
    return InventoryService(uow, audit=audit)


def get_category_service(uow: UnitOfWork = Depends(get_uow)) -> CategoryService:
    return CategoryService(uow)


def get_account_service(uow: UnitOfWork = Depends(get_uow)) -> AccountService:
    return AccountService(uow)


def get_report_service(uow: UnitOfWork = Depends(get_uow)) -> ReportService:
    return ReportService(uow)
