"""
Authorization policies.

A policy looks at who is acting, on what, and how, and returns a Decision.
Routes compose policies instead of comparing role strings inline.
"""

import enum
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from eventboard.core.exceptions import ForbiddenError
from eventboard.domain.models.user import Role


class Action(str, enum.Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    MANAGE = "manage"


class Subject(Protocol):
    id: int
    role: Role


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str = ""

    @classmethod
    def allow(cls) -> "Decision":
        return cls(True)

    @classmethod
    def deny(cls, reason: str) -> "Decision":
        return cls(False, reason)


Policy = Callable[[Subject, Optional[Any], Action], Decision]


def admin_only(subject: Subject, resource: Optional[Any], action: Action) -> Decision:
    if subject.role == Role.ADMIN:
        return Decision.allow()
    return Decision.deny("Access denied. Administrator privileges required.")


def owner_or_admin(subject: Subject, resource: Optional[Any], action: Action) -> Decision:
    """The resource's creator, or any admin."""
    if subject.role == Role.ADMIN:
        return Decision.allow()
    owner_id = getattr(resource, "created_by", None)
    if owner_id is not None and owner_id == subject.id:
        return Decision.allow()
    kind = type(resource).__name__.lower() if resource is not None else "resource"
    return Decision.deny(f"You do not have permission to {action.value} this {kind}.")


def authorize(policy: Policy, subject: Subject, resource: Optional[Any], action: Action) -> None:
    decision = policy(subject, resource, action)
    if not decision.allowed:
        raise ForbiddenError(decision.reason or ForbiddenError().message)
