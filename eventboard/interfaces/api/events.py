"""Events API routes — public listing, owner-guarded create/update/delete."""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from eventboard.application.services import event_service
from eventboard.domain.models.user import User
from eventboard.domain.repositories.event_repository import EventRepository
from eventboard.domain.schemas.event import (
    CategoryList,
    CategoryResponse,
    EventCreate,
    EventListResponse,
    EventRead,
    EventResponse,
    EventUpdate,
)
from eventboard.interfaces.api.deps import get_current_user, parse_id
from eventboard.interfaces.deps import get_event_repository

router = APIRouter(prefix="/events", tags=["Events"])


@router.get("", response_model=EventListResponse)
def list_events(
    category: Optional[str] = None,
    repo: EventRepository = Depends(get_event_repository),
):
    events = event_service.list_events(repo, category)
    return EventListResponse(count=len(events), data=[EventRead.model_validate(e) for e in events])


@router.get("/categories", response_model=CategoryResponse)
def list_categories():
    return CategoryResponse(data=CategoryList(categories=event_service.list_categories()))


@router.get("/{event_id}", response_model=EventResponse)
def get_event(event_id: str, repo: EventRepository = Depends(get_event_repository)):
    event = event_service.get_event(repo, parse_id(event_id, "Event ID"))
    return EventResponse(data=EventRead.model_validate(event))


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    user: User = Depends(get_current_user),
    repo: EventRepository = Depends(get_event_repository),
):
    event = event_service.create_event(repo, user, payload)
    return EventResponse(data=EventRead.model_validate(event))


@router.put("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: str,
    payload: EventUpdate,
    user: User = Depends(get_current_user),
    repo: EventRepository = Depends(get_event_repository),
):
    event = event_service.update_event(repo, user, parse_id(event_id, "Event ID"), payload)
    return EventResponse(data=EventRead.model_validate(event))


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: str,
    user: User = Depends(get_current_user),
    repo: EventRepository = Depends(get_event_repository),
):
    event_service.delete_event(repo, user, parse_id(event_id, "Event ID"))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
