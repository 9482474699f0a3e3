"""SQLAlchemy 2.0 engine, session factory, and declarative base.

Usage::

    from toolscore.storage.sql import SQLScoreStore, create_session_factory

    session_factory = create_session_factory("sqlite:///toolscore.db")
    store = SQLScoreStore(session_factory)
"""

import logging
import os

from dotenv import load_dotenv
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from toolscore.consts import ENV_DATABASE_URL

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Declarative Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """Shared declarative base for all SQLAlchemy ORM models."""

    pass


# ---------------------------------------------------------------------------
# Connection URL
# ---------------------------------------------------------------------------
def get_database_url() -> str | None:
    """Read the database URL from the environment (and a .env file if present)."""
    load_dotenv()
    url = os.getenv(ENV_DATABASE_URL, "").strip()
    return url or None


# ---------------------------------------------------------------------------
# Engine + Session Factory
# ---------------------------------------------------------------------------
def create_db_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine for the given URL.

    In-memory SQLite gets a single shared connection so every session sees
    the same database.
    """
    if url.startswith("sqlite") and (":memory:" in url or url.rstrip("/") == "sqlite:"):
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite"):
        return create_engine(url, echo=echo)
    return create_engine(
        url,
        echo=echo,
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,
        pool_recycle=300,
    )


def create_session_factory(
    url: str,
    echo: bool = False,
    create_tables: bool = True,
) -> sessionmaker[Session]:
    """Build a session factory, creating missing tables by default."""
    # Register ORM tables on Base.metadata
    from toolscore.storage.sql import orm  # noqa: F401

    engine = create_db_engine(url, echo=echo)
    if create_tables:
        Base.metadata.create_all(engine)
    logger.info(f"SQLAlchemy engine configured for {engine.dialect.name}")
    return sessionmaker(engine, expire_on_commit=False)
