"""
SQLAlchemy Implementation of Event Repository.
"""

from typing import Any, Dict, List, Optional

from eventboard.domain.models.event import Creator, Event, EventCategory
from eventboard.domain.repositories.event_repository import EventRepository
from eventboard.infrastructure.orm import EventRow
from eventboard.infrastructure.repositories.base_repository import SQLAlchemyRepository, as_utc


class SQLAlchemyEventRepository(SQLAlchemyRepository[Event, EventRow], EventRepository):
    """Event repository implementation using SQLAlchemy."""

    model = EventRow

    def to_entity(self, row: EventRow) -> Event:
        creator = None
        if row.creator is not None:
            creator = Creator(id=row.creator.id, name=row.creator.name, role=row.creator.role.value)
        return Event(
            id=row.id,
            title=row.title,
            description=row.description,
            date=as_utc(row.date),
            category=row.category,
            created_by=row.created_by,
            created_at=as_utc(row.created_at),
            creator=creator,
        )

    def to_row_data(self, entity: Event) -> Dict[str, Any]:
        return {
            "title": entity.title,
            "description": entity.description,
            "date": entity.date,
            "category": entity.category,
            "created_by": entity.created_by,
        }

    def list_filtered(self, category: Optional[EventCategory] = None) -> List[Event]:
        query = self.db.query(EventRow)
        if category:
            query = query.filter(EventRow.category == category)
        return [self.to_entity(row) for row in self._newest_first(query).all()]

    def list_by_creator(self, user_id: int) -> List[Event]:
        query = self.db.query(EventRow).filter(EventRow.created_by == user_id)
        return [self.to_entity(row) for row in self._newest_first(query).all()]
