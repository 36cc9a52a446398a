"""User administration — listing users and changing roles."""

from typing import List

import structlog

from eventboard.core.authorization import Action, admin_only, authorize
from eventboard.core.exceptions import NotFoundError
from eventboard.domain.models.user import User
from eventboard.domain.repositories.user_repository import UserRepository
from eventboard.domain.schemas.auth import RoleUpdate

logger = structlog.get_logger(__name__)


def list_users(users: UserRepository, actor: User) -> List[User]:
    authorize(admin_only, actor, None, Action.READ)
    return users.list()


def change_role(users: UserRepository, actor: User, user_id: int, payload: RoleUpdate) -> User:
    authorize(admin_only, actor, None, Action.MANAGE)

    target = users.get_by_id(user_id)
    if target is None:
        raise NotFoundError("User")

    updated = users.update(user_id, {"role": payload.role})
    if updated is None:
        raise NotFoundError("User")
    logger.info(
        "User role changed",
        user_id=user_id,
        old_role=target.role.value,
        new_role=updated.role.value,
        changed_by=actor.id,
    )
    return updated
