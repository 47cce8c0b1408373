"""Database infrastructure setup."""

import asyncio
from collections.abc import Callable
from typing import Optional, TypeVar

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.infrastructure.config.settings import settings

T = TypeVar("T")

# Shared declarative base for every table of the gateway
Base = declarative_base()

# Engine creation is deferred until needed to avoid errors when using in-memory mode
_engine = None
_SessionLocal = None


def _get_engine():
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        if not settings.database_url:
            raise ValueError("DATABASE_URL is required for database operations")
        _engine = create_engine(
            settings.database_url,
            pool_pre_ping=True,  # Verify connections before using
            echo=settings.debug_mode,  # Log SQL queries in debug mode
        )
    return _engine


def get_db_session() -> Session:
    """
    Get a database session.

    Returns:
        SQLAlchemy session instance
    """
    global _SessionLocal
    if _SessionLocal is None:
        engine = _get_engine()
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return _SessionLocal()


async def run_in_db_session(
    work: Callable[[Session], T],
    session_factory: Optional[Callable[[], Session]] = None,
) -> T:
    """
    Run blocking ORM work in a worker thread with its own session.

    The session is committed when work returns, rolled back when it raises,
    and always closed.

    Args:
        work: Function receiving the session
        session_factory: Session factory (defaults to get_db_session)

    Returns:
        Whatever work returns
    """
    factory = session_factory or get_db_session

    def _run() -> T:
        db = factory()
        try:
            result = work(db)
            db.commit()
            return result
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    return await asyncio.to_thread(_run)
