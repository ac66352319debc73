from __future__ import annotations

from collections.abc import Callable, Generator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from runplan.config.settings import settings
from runplan.db.models import Base

SessionFactory = Callable[[], Session]

# Lazy initialization to avoid import-time database connections
_engine: Engine | None = None
_SessionLocal: sessionmaker[Session] | None = None


def build_engine(database_url: str) -> Engine:
    """Create an engine with connection args suited to the backend."""
    connect_args = {}
    if "sqlite" in database_url.lower():
        connect_args = {"check_same_thread": False}
    return create_engine(
        database_url,
        connect_args=connect_args,
        echo=False,
        pool_pre_ping=True,
    )


def get_engine() -> Engine:
    """Get or create the database engine (lazy initialization)."""
    global _engine
    if _engine is None:
        logger.info(f"Initializing database engine: {settings.database_url}")
        _engine = build_engine(settings.database_url)
        Base.metadata.create_all(_engine)
        logger.info("Database engine initialized")
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    """Get or create the session factory (lazy initialization)."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
        logger.info("Database session factory initialized")
    return _SessionLocal


@contextmanager
def session_scope(factory: SessionFactory | None = None) -> Generator[Session, None, None]:
    """Transactional session: commit on success, rollback and re-raise on error."""
    session = (factory or get_session_factory())()
    try:
        yield session
        session.commit()
    except Exception:
        logger.debug("Rolling back database session")
        session.rollback()
        raise
    finally:
        session.close()
