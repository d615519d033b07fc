"""
Database configuration and session management.
"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from command_assistant.core.config import get_database_path

# Create SQLAlchemy base class for models
Base = declarative_base()

# Database engine (will be initialized on first use)
_engine = None
_SessionLocal = None


def get_engine():
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        db_path = get_database_path()
        _engine = create_engine(
            f"sqlite:///{db_path}",
            connect_args={"check_same_thread": False, "timeout": 30},
            echo=False,
        )
    return _engine


def get_session_local():
    """Get or create the session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=get_engine(),
        )
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    Dependency that provides a database session.

    Yields:
        Database session that will be closed after use.
    """
    SessionLocal = get_session_local()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Initialize the database by creating all tables.
    Safe to call repeatedly; existing tables and rows are kept.
    """
    # Import models so they are registered with Base
    from command_assistant.models import ai_settings  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def drop_db():
    """
    Drop all database tables.
    Use with caution - only for testing purposes.
    """
    Base.metadata.drop_all(bind=get_engine())
