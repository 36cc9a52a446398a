"""
API Dependencies — per-request session, repositories and app-wide services.
"""

from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from eventboard.core.tokens import TokenService
from eventboard.domain.repositories.event_repository import EventRepository
from eventboard.domain.repositories.user_repository import UserRepository
from eventboard.infrastructure.repositories.event_repository import SQLAlchemyEventRepository
from eventboard.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance."""
    return SQLAlchemyUserRepository(db)


def get_event_repository(db: Session = Depends(get_db)) -> EventRepository:
    """Get event repository instance."""
    return SQLAlchemyEventRepository(db)
