"""
Database configuration and session management.
"""

import logging
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from bizdesk.config import settings

logger = logging.getLogger(__name__)


# SQLite connections are shared across the threadpool FastAPI runs sync routes in
connect_args = {"check_same_thread": False} if settings.is_sqlite else {}

# Create SQLAlchemy engine
engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,
)

# Create SessionLocal class
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Create declarative base
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get a database session.
    Commits when the request succeeds and rolls back otherwise.
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> None:
    """Create all tables that do not exist yet."""
    # Register models on Base.metadata
    from bizdesk.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")
