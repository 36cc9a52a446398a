"""Profile service — the authenticated user's own record."""

import structlog

from eventboard.core.exceptions import NotFoundError
from eventboard.core.security import hash_password
from eventboard.domain.models.user import User
from eventboard.domain.repositories.user_repository import UserRepository
from eventboard.domain.schemas.auth import ProfileUpdate

logger = structlog.get_logger(__name__)


def get_profile(users: UserRepository, user: User) -> User:
    profile = users.get_by_id(user.id)
    if profile is None:
        raise NotFoundError("User")
    return profile


def update_profile(users: UserRepository, user: User, payload: ProfileUpdate) -> User:
    changes = payload.changes()
    fields = sorted(changes)
    if "password" in changes:
        changes["password_hash"] = hash_password(changes.pop("password"))

    updated = users.update(user.id, changes)
    if updated is None:
        raise NotFoundError("User")
    logger.info("Profile updated", user_id=user.id, fields=fields)
    return updated
