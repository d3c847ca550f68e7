"""Database configuration and session management."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Generator
from typing import Any, TypeVar

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from portfolio_api.config import get_settings
from portfolio_api.domain.errors import StoreUnavailable


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


settings = get_settings()

logger = logging.getLogger(__name__)

_F = TypeVar("_F", bound=Callable[..., Any])


def _engine_options(database_url: str) -> dict[str, Any]:
    """Return backend specific keyword arguments for ``create_engine``."""

    if database_url.startswith("sqlite"):
        # Sessions are handed to worker threads by the realtime channels.
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


database_url = settings.database_url
engine = create_engine(database_url, **_engine_options(database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database() -> None:
    """Ensure all ORM models have corresponding database tables."""

    from portfolio_api.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def translate_store_errors(method: _F) -> _F:
    """Roll back and re-raise SQLAlchemy failures as :class:`StoreUnavailable`.

    Meant for repository methods; the wrapped object must expose ``session``.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except SQLAlchemyError as exc:
            logger.error("Store operation %s failed: %s", method.__qualname__, exc)
            self.session.rollback()
            raise StoreUnavailable("The data store is unavailable") from exc

    return wrapper  # type: ignore[return-value]


__all__ = [
    "Base",
    "SessionLocal",
    "engine",
    "get_db",
    "initialize_database",
    "translate_store_errors",
]
