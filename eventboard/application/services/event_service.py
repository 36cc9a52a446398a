"""Event service — listing, creation and owner-guarded mutation of events."""

from typing import List, Optional

import structlog

from eventboard.core.authorization import Action, authorize, owner_or_admin
from eventboard.core.exceptions import NotFoundError, ValidationError
from eventboard.domain.models.event import Event, EventCategory
from eventboard.domain.models.user import User
from eventboard.domain.repositories.event_repository import EventRepository
from eventboard.domain.schemas.event import CATEGORY_CHOICES, EventCreate, EventUpdate

logger = structlog.get_logger(__name__)


def parse_category(value: Optional[str]) -> Optional[EventCategory]:
    """Category query parameter. Empty means no filter."""
    if not value:
        return None
    try:
        return EventCategory(value)
    except ValueError:
        raise ValidationError(
            {"category": f"Invalid category query parameter. Must be one of: {CATEGORY_CHOICES}."}
        )


def list_events(repo: EventRepository, category: Optional[str] = None) -> List[Event]:
    return repo.list_filtered(parse_category(category))


def list_categories() -> List[str]:
    return EventCategory.values()


def get_event(repo: EventRepository, event_id: int) -> Event:
    event = repo.get_by_id(event_id)
    if event is None:
        raise NotFoundError("Event")
    return event


def list_events_for_user(repo: EventRepository, user: User) -> List[Event]:
    return repo.list_by_creator(user.id)


def create_event(repo: EventRepository, user: User, payload: EventCreate) -> Event:
    event = repo.create(Event(created_by=user.id, **payload.model_dump()))
    logger.info("Event created", event_id=event.id, user_id=user.id, category=event.category.value)
    return event


def _locate_for(repo: EventRepository, user: User, event_id: int, action: Action) -> Event:
    # Existence before ownership, so a missing event never reads as a permission problem
    event = get_event(repo, event_id)
    authorize(owner_or_admin, user, event, action)
    return event


def update_event(repo: EventRepository, user: User, event_id: int, payload: EventUpdate) -> Event:
    _locate_for(repo, user, event_id, Action.UPDATE)

    changes = payload.changes()
    updated = repo.update(event_id, changes)
    if updated is None:
        raise NotFoundError("Event")
    logger.info("Event updated", event_id=event_id, user_id=user.id, fields=sorted(changes))
    return updated


def delete_event(repo: EventRepository, user: User, event_id: int) -> None:
    _locate_for(repo, user, event_id, Action.DELETE)

    if not repo.delete(event_id):
        logger.warning("Event vanished between ownership check and delete", event_id=event_id)
        raise NotFoundError("Event", "Event could not be deleted.")
    logger.info("Event deleted", event_id=event_id, user_id=user.id)
