"""Profile routes — the authenticated user's own record and events."""

from fastapi import APIRouter, Depends

from eventboard.application.services import event_service, profile_service
from eventboard.domain.models.user import User
from eventboard.domain.repositories.event_repository import EventRepository
from eventboard.domain.repositories.user_repository import UserRepository
from eventboard.domain.schemas.auth import ProfileResponse, ProfileUpdate, ProfileUpdateResponse, UserRead
from eventboard.domain.schemas.event import EventListResponse, EventRead
from eventboard.interfaces.api.deps import get_current_user
from eventboard.interfaces.deps import get_event_repository, get_user_repository

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=ProfileResponse)
def get_profile(
    user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    return ProfileResponse(data=UserRead.model_validate(profile_service.get_profile(users, user)))


@router.put("", response_model=ProfileUpdateResponse)
def update_profile(
    payload: ProfileUpdate,
    user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    updated = profile_service.update_profile(users, user, payload)
    return ProfileUpdateResponse(message="Profile updated successfully.", data=UserRead.model_validate(updated))


@router.get("/events", response_model=EventListResponse)
def my_events(
    user: User = Depends(get_current_user),
    repo: EventRepository = Depends(get_event_repository),
):
    events = event_service.list_events_for_user(repo, user)
    return EventListResponse(count=len(events), data=[EventRead.model_validate(e) for e in events])
