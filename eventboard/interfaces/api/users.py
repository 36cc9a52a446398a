"""User administration routes — admin only."""

from fastapi import APIRouter, Depends

from eventboard.application.services import user_service
from eventboard.domain.models.user import User
from eventboard.domain.repositories.user_repository import UserRepository
from eventboard.domain.schemas.auth import RoleUpdate, UserListResponse, UserRead, UserResponse
from eventboard.interfaces.api.deps import parse_id, require_admin
from eventboard.interfaces.deps import get_user_repository

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=UserListResponse)
def list_users(
    admin: User = Depends(require_admin),
    users: UserRepository = Depends(get_user_repository),
):
    result = user_service.list_users(users, admin)
    return UserListResponse(count=len(result), data=[UserRead.model_validate(u) for u in result])


@router.put("/{user_id}/role", response_model=UserResponse)
def change_user_role(
    user_id: str,
    payload: RoleUpdate,
    admin: User = Depends(require_admin),
    users: UserRepository = Depends(get_user_repository),
):
    updated = user_service.change_role(users, admin, parse_id(user_id, "User ID"), payload)
    return UserResponse(message="User role updated successfully.", user=UserRead.model_validate(updated))
