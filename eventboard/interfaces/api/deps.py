"""FastAPI dependencies — bearer authentication and path ids."""

import re
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from eventboard.application.services.auth_service import resolve_user
from eventboard.core.authorization import Action, admin_only, authorize
from eventboard.core.exceptions import UnauthorizedError, ValidationError
from eventboard.core.tokens import TokenService
from eventboard.domain.models.user import User
from eventboard.domain.repositories.user_repository import UserRepository
from eventboard.interfaces.deps import get_token_service, get_user_repository

security = HTTPBearer(auto_error=False)

_INT_RE = re.compile(r"^[0-9]{1,10}\Z")
MAX_ID = 2**31 - 1


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
) -> User:
    """Extract and validate the current user from the JWT bearer token."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("No authentication token provided. Access denied.", code="token_missing")
    return resolve_user(users, tokens, credentials.credentials)


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Require admin role."""
    authorize(admin_only, user, None, Action.MANAGE)
    return user


def parse_id(raw: str, label: str = "ID") -> int:
    """Path id as an int that fits the 32-bit integer primary key columns."""
    digits = raw.strip()
    if not _INT_RE.match(digits) or int(digits) > MAX_ID:
        raise ValidationError({"id": f"{label} must be a valid integer."})
    return int(digits)
