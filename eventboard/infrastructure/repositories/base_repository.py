"""
SQLAlchemy implementation of the Base Repository.
Rows never leave this layer: every method returns plain domain records.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Mapping, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from eventboard.infrastructure.database import Base

EntityType = TypeVar("EntityType")
RowType = TypeVar("RowType", bound=Base)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; everything stored is UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SQLAlchemyRepository(Generic[EntityType, RowType]):
    """Generic repository implementation for SQLAlchemy models."""

    model: Type[RowType]

    def __init__(self, db: Session):
        self.db = db

    def to_entity(self, row: RowType) -> EntityType:
        raise NotImplementedError

    def to_row_data(self, entity: EntityType) -> Dict[str, Any]:
        raise NotImplementedError

    def _newest_first(self, query):
        return query.order_by(self.model.created_at.desc(), self.model.id.desc())

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def get_by_id(self, id: int) -> Optional[EntityType]:
        row = self.db.get(self.model, id)
        return self.to_entity(row) if row else None

    def list(self) -> List[EntityType]:
        rows = self._newest_first(self.db.query(self.model)).all()
        return [self.to_entity(row) for row in rows]

    def create(self, entity: EntityType) -> EntityType:
        row = self.model(**self.to_row_data(entity))
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        return self.to_entity(row)

    def update(self, id: int, changes: Mapping[str, Any]) -> Optional[EntityType]:
        row = self.db.get(self.model, id)
        if row is None:
            return None

        for field, value in changes.items():
            if hasattr(row, field):
                setattr(row, field, value)

        self._commit()
        self.db.refresh(row)
        return self.to_entity(row)

    def delete(self, id: int) -> bool:
        row = self.db.get(self.model, id)
        if row is None:
            return False
        self.db.delete(row)
        self._commit()
        return True
