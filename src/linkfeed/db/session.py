"""Engine, session factory and schema helpers."""

from __future__ import annotations

import logging
from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from linkfeed.core.settings import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for LinkFeed tables."""


# Register every mapped table on Base.metadata.
import linkfeed.models  # noqa: E402,F401


def build_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine for ``url``.

    SQLite connections may be handed between the threads of the ASGI
    server's pool, so the same-thread check is turned off for them.
    """
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, pool_pre_ping=True, echo=echo, connect_args=connect_args)


engine = build_engine(settings.database_url, echo=settings.sql_debug)

SessionLocal = sessionmaker(bind=engine, autoflush=False)


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session, closed once the response is produced."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_connection() -> None:
    """Round-trip ``SELECT 1``; raises if the database is unreachable."""
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
    logger.info("Database reachable at %s", engine.url.render_as_string(hide_password=True))


def create_tables() -> None:
    Base.metadata.create_all(bind=engine)
