"""Database engine and session factory, built from Settings."""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from eventboard.config import Settings

Base = declarative_base()

_IN_MEMORY_SQLITE = ("sqlite://", "sqlite:///:memory:")


def create_db_engine(settings: Settings) -> Engine:
    url = settings.DATABASE_URL
    kwargs: dict = {"echo": settings.DB_ECHO, "future": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in _IN_MEMORY_SQLITE:
            # One shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_engine(url, **kwargs)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    # Import the ORM rows so they register on Base.metadata
    from eventboard.infrastructure import orm  # noqa: F401

    Base.metadata.create_all(bind=engine)
