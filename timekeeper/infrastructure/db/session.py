"""
Database session management (SQLAlchemy)
"""
import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session

from timekeeper.config import get_settings
from timekeeper.domain.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for all ORM models
    """
    pass


# Singleton engine and session factory
_engine = None
_SessionLocal = None


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_engine():
    """Get or create SQLAlchemy engine (singleton)"""
    global _engine
    if _engine is None:
        settings = get_settings()
        url = settings.get_sqlalchemy_url()
        _engine = create_engine(url, pool_pre_ping=True)
        enable_sqlite_foreign_keys(_engine)
    return _engine


def get_session_factory():
    """Get or create session factory (singleton)"""
    global _SessionLocal
    if _SessionLocal is None:
        engine = get_engine()
        _SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    return _SessionLocal


def get_db() -> Session:
    """
    Dependency for FastAPI - opens a session and closes it after the request

    Usage:
        @router.get("/projects")
        def list_projects(db: Session = Depends(get_db)):
            ...
    """
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine | None = None) -> None:
    """
    Create missing tables.

    Raises:
        StoreUnavailableError: if the database cannot be opened or migrated
    """
    # models must be imported so their tables are registered on Base.metadata
    from timekeeper.infrastructure.db import models  # noqa: F401

    engine = engine or get_engine()
    try:
        Base.metadata.create_all(engine)
    except SQLAlchemyError as exc:
        logger.exception("Schema migration failed for %s", engine.url)
        raise StoreUnavailableError(f"Cannot open or migrate database: {exc}") from exc


def check_db_connection() -> None:
    """
    Health check - verifies the database answers ``SELECT 1``

    Raises:
        StoreUnavailableError: if the database is unreachable
    """
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.exception("Database readiness check failed")
        raise StoreUnavailableError(f"Database unavailable: {exc}") from exc
