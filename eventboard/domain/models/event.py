"""Event domain record."""

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


class EventCategory(str, enum.Enum):
    CONCERT = "concert"
    LECTURE = "lecture"
    EXHIBITION = "exhibition"
    MASTER_CLASS = "master class"
    SPORT = "sport"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


@dataclass
class Creator:
    """Summary of the user who created an event."""

    id: int
    name: str
    role: str


@dataclass
class Event:
    title: str
    date: datetime
    category: EventCategory
    created_by: int
    description: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    creator: Optional[Creator] = None

    def __repr__(self):
        return f"<Event {self.id} - {self.title}>"
