import dataclasses
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional

import pytest
from fastapi.testclient import TestClient

from eventboard.config import Settings
from eventboard.core.tokens import TokenService
from eventboard.domain.models.event import Creator, Event, EventCategory
from eventboard.domain.models.user import User
from eventboard.domain.repositories.event_repository import EventRepository
from eventboard.domain.repositories.user_repository import DuplicateEmailError, UserRepository
from eventboard.main import create_app


# --- In-memory repositories (service tests run without a database) ---


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: Dict[int, User] = {}
        self._seq = 1

    def get_by_id(self, id: int) -> Optional[User]:
        user = self._users.get(id)
        return dataclasses.replace(user) if user else None

    def get_by_email(self, email: str) -> Optional[User]:
        for user in self._users.values():
            if user.email == email.lower():
                return dataclasses.replace(user)
        return None

    def list(self) -> List[User]:
        return sorted(self._users.values(), key=lambda u: u.id, reverse=True)

    def create(self, entity: User) -> User:
        if self.get_by_email(entity.email):
            raise DuplicateEmailError(entity.email)
        user = dataclasses.replace(
            entity,
            id=self._seq,
            email=entity.email.lower(),
            created_at=datetime.now(timezone.utc),
        )
        self._seq += 1
        self._users[user.id] = user
        return dataclasses.replace(user)

    def update(self, id: int, changes: Mapping[str, Any]) -> Optional[User]:
        if id not in self._users:
            return None
        self._users[id] = dataclasses.replace(self._users[id], **changes)
        return dataclasses.replace(self._users[id])

    def delete(self, id: int) -> bool:
        return self._users.pop(id, None) is not None


class InMemoryEventRepository(EventRepository):
    def __init__(self, users: InMemoryUserRepository) -> None:
        self._users = users
        self._events: Dict[int, Event] = {}
        self._seq = 1

    def _with_creator(self, event: Event) -> Event:
        owner = self._users.get_by_id(event.created_by)
        creator = Creator(id=owner.id, name=owner.name, role=owner.role.value) if owner else None
        return dataclasses.replace(event, creator=creator)

    def get_by_id(self, id: int) -> Optional[Event]:
        event = self._events.get(id)
        return self._with_creator(event) if event else None

    def list(self) -> List[Event]:
        return self.list_filtered()

    def list_filtered(self, category: Optional[EventCategory] = None) -> List[Event]:
        events = [e for e in self._events.values() if category is None or e.category == category]
        return [self._with_creator(e) for e in sorted(events, key=lambda e: e.id, reverse=True)]

    def list_by_creator(self, user_id: int) -> List[Event]:
        return [e for e in self.list_filtered() if e.created_by == user_id]

    def create(self, entity: Event) -> Event:
        event = dataclasses.replace(entity, id=self._seq, created_at=datetime.now(timezone.utc))
        self._seq += 1
        self._events[event.id] = event
        return self._with_creator(event)

    def update(self, id: int, changes: Mapping[str, Any]) -> Optional[Event]:
        if id not in self._events:
            return None
        self._events[id] = dataclasses.replace(self._events[id], **changes)
        return self._with_creator(self._events[id])

    def delete(self, id: int) -> bool:
        return self._events.pop(id, None) is not None


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def event_repo(user_repo) -> InMemoryEventRepository:
    return InMemoryEventRepository(user_repo)


# --- Application fixtures ---


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        SECRET_KEY="test_secret",
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
        ADMIN_EMAIL="admin@example.com",
        ADMIN_PASSWORD="admin-password",
    )


@pytest.fixture
def token_service(settings) -> TokenService:
    return TokenService(settings)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def future_iso(days: int = 7) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).replace(microsecond=0).isoformat()


def register(client, email: str, password: str = "password123", name: str = "Test User") -> dict:
    response = client.post("/auth/register", json={"name": name, "email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()["user"]


def login(client, email: str, password: str = "password123") -> str:
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(client) -> dict:
    user = register(client, "alice@example.com", name="Alice")
    return {"user": user, "headers": bearer(login(client, "alice@example.com"))}


@pytest.fixture
def bob(client) -> dict:
    user = register(client, "bob@example.com", name="Bob")
    return {"user": user, "headers": bearer(login(client, "bob@example.com"))}


@pytest.fixture
def admin(client) -> dict:
    # Seeded at startup from ADMIN_EMAIL / ADMIN_PASSWORD
    return {"headers": bearer(login(client, "admin@example.com", "admin-password"))}


@pytest.fixture
def make_event(client):
    def _make(headers: dict, **overrides) -> dict:
        body = {
            "title": "Jazz Night",
            "description": "Live quartet",
            "date": future_iso(),
            "category": "concert",
        }
        body.update(overrides)
        response = client.post("/events", json=body, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make
