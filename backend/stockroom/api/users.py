"""Staff account management (owner only)."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from stockroom.core.deps import get_account_service, require_permission
from stockroom.models.role import PermissionAction
from stockroom.schemas.auth import CurrentUser, UserOut
from stockroom.schemas.common import MessageResponse
from stockroom.schemas.user import (
    UserCreate,
    UserCreatedResponse,
    UserListResponse,
    UserResponse,
    UserUpdate,
)
from stockroom.services.accounts import AccountService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UserListResponse)
async def list_users(
    current_user: CurrentUser = Depends(require_permission(PermissionAction.USER_READ)),
    service: AccountService = Depends(get_account_service),
):
    users = await service.list()
    return UserListResponse(users=[UserOut.model_validate(u) for u in users])


@router.post("", response_model=UserCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate,
    current_user: CurrentUser = Depends(require_permission(PermissionAction.USER_CREATE)),
    service: AccountService = Depends(get_account_service),
):
    """Create an account. The generated password is only ever returned here."""
    user, password = await service.create(body, created_by=current_user.username)
    return UserCreatedResponse(
        message="User created successfully",
        user=UserOut.model_validate(user),
        temporary_password=password,
    )


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    body: UserUpdate,
    current_user: CurrentUser = Depends(require_permission(PermissionAction.USER_UPDATE)),
    service: AccountService = Depends(get_account_service),
):
    user = await service.update(user_id, body)
    return UserResponse(message="User updated successfully", user=UserOut.model_validate(user))


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: UUID,
    current_user: CurrentUser = Depends(require_permission(PermissionAction.USER_DELETE)),
    service: AccountService = Depends(get_account_service),
):
    await service.delete(user_id)
    return MessageResponse(message="User deleted successfully")
