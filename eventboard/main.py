"""FastAPI application — main entry point."""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI

from eventboard.application.services.auth_service import ensure_admin_account
from eventboard.config import Settings, get_settings
from eventboard.core.exceptions import register_exception_handlers
from eventboard.core.logging import configure_logging
from eventboard.core.middleware import setup_middleware
from eventboard.core.tokens import TokenService
from eventboard.infrastructure.database import create_db_engine, create_session_factory, init_db
from eventboard.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from eventboard.interfaces.api.auth import router as auth_router
from eventboard.interfaces.api.events import router as events_router
from eventboard.interfaces.api.profile import router as profile_router
from eventboard.interfaces.api.users import router as users_router

logger = structlog.get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    engine = create_db_engine(settings)
    session_factory = create_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan — startup and shutdown events."""
        logger.info("Starting Eventboard API...", env=settings.ENVIRONMENT)

        # Create DB tables (use migrations in production)
        init_db(engine)
        logger.info("Database tables created/verified")

        if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
            db = session_factory()
            try:
                ensure_admin_account(SQLAlchemyUserRepository(db), settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
            finally:
                db.close()

        yield

        engine.dispose()
        logger.info("Eventboard API stopped")

    app = FastAPI(
        title="Eventboard",
        description="Event management API — authentication, roles and event CRUD",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.token_service = TokenService(settings)

    setup_middleware(app, settings)
    register_exception_handlers(app, production=settings.is_production)

    app.include_router(auth_router)
    app.include_router(events_router)
    app.include_router(profile_router)
    app.include_router(users_router)

    @app.get("/", tags=["Meta"])
    def root():
        return {
            "name": "Eventboard",
            "version": "1.0.0",
            "status": "running",
            "docs": "/docs",
        }

    @app.get("/health", tags=["Meta"])
    def health():
        return {"status": "healthy"}

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run("eventboard.main:create_app", factory=True, host="0.0.0.0", port=8000)
