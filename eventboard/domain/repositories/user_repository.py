"""
User Repository Interface.
Defines specific data access operations for Users.
"""

from typing import Optional

from eventboard.domain.models.user import User
from eventboard.domain.repositories.base import BaseRepository


class DuplicateEmailError(Exception):
    """Raised by `create` when the email is already registered."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already registered: {email}")


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        """Look a user up by (lower-cased) email."""
        ...
