"""
Event Repository Interface.
Defines specific data access operations for Events.
"""

from typing import List, Optional

from eventboard.domain.models.event import Event, EventCategory
from eventboard.domain.repositories.base import BaseRepository


class EventRepository(BaseRepository[Event]):
    """Interface for Event-specific operations. Returned events carry their creator summary."""

    def list_filtered(self, category: Optional[EventCategory] = None) -> List[Event]:
        """Events newest first, optionally restricted to one category."""
        ...

    def list_by_creator(self, user_id: int) -> List[Event]:
        """Events created by `user_id`, newest first."""
        ...
