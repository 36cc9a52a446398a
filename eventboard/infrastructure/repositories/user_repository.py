"""
SQLAlchemy Implementation of User Repository.
"""

from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError

from eventboard.domain.models.user import User
from eventboard.domain.repositories.user_repository import DuplicateEmailError, UserRepository
from eventboard.infrastructure.orm import UserRow
from eventboard.infrastructure.repositories.base_repository import SQLAlchemyRepository, as_utc


class SQLAlchemyUserRepository(SQLAlchemyRepository[User, UserRow], UserRepository):
    """User repository implementation using SQLAlchemy."""

    model = UserRow

    def to_entity(self, row: UserRow) -> User:
        return User(
            id=row.id,
            email=row.email,
            name=row.name,
            role=row.role,
            password_hash=row.password_hash,
            first_name=row.first_name,
            last_name=row.last_name,
            middle_name=row.middle_name,
            gender=row.gender,
            birth_date=row.birth_date,
            created_at=as_utc(row.created_at),
        )

    def to_row_data(self, entity: User) -> Dict[str, Any]:
        return {
            "email": entity.email.lower(),
            "name": entity.name,
            "role": entity.role,
            "password_hash": entity.password_hash,
            "first_name": entity.first_name,
            "last_name": entity.last_name,
            "middle_name": entity.middle_name,
            "gender": entity.gender,
            "birth_date": entity.birth_date,
        }

    def get_by_email(self, email: str) -> Optional[User]:
        row = self.db.query(UserRow).filter(UserRow.email == email.lower()).first()
        return self.to_entity(row) if row else None

    def create(self, entity: User) -> User:
        try:
            return super().create(entity)
        except IntegrityError:
            # The unique index on email is the only constraint a valid user can violate
            raise DuplicateEmailError(entity.email)
