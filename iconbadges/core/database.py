"""SQLAlchemy engine and session factory for the custom icon store."""
from __future__ import annotations

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from .logging import get_logger
from .settings import get_settings

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base declarative class for all ORM models."""


def _build_engine(url: str) -> Engine:
    # SQLite connections are shared across FastAPI's worker threads.
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=False, pool_pre_ping=True, connect_args=connect_args)


_engine = _build_engine(get_settings().resolved_database_url)
SessionLocal = sessionmaker(bind=_engine, autoflush=False, autocommit=False, expire_on_commit=False)


def init_database() -> None:
    """Create the icon tables if they do not exist yet."""
    import iconbadges.core.models  # noqa: F401 ensures models are registered

    Base.metadata.create_all(bind=_engine)
    logger.info("database_ready", dialect=_engine.dialect.name)


def get_engine() -> Engine:
    return _engine


__all__ = ["Base", "SessionLocal", "init_database", "get_engine"]
