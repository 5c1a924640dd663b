"""Authentication endpoints: login and self-service password change."""

from fastapi import APIRouter, Depends

from stockroom.core.deps import get_account_service, get_current_user
from stockroom.schemas.auth import (
    ChangePasswordRequest,
    CurrentUser,
    LoginRequest,
    LoginResponse,
    UserOut,
)
from stockroom.schemas.common import MessageResponse
from stockroom.services.accounts import AccountService

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, service: AccountService = Depends(get_account_service)):
    """Authenticate via username + password, return the account and a JWT."""
    user, token = await service.login(body)
    return LoginResponse(user=UserOut.model_validate(user), access_token=token)


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    body: ChangePasswordRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    await service.change_password(current_user.id, body)
    return MessageResponse(message="Password changed successfully")
