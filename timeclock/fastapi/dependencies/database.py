"""
Database engine, session factory and declarative base.

The store is the only shared state between requests; every request gets
its own session through ``get_sync_db``.
"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from timeclock.fastapi.core.init_settings import global_settings

logger = logging.getLogger(__name__)


def _engine_kwargs(url: str) -> dict:
    """SQLite needs cross-thread access for FastAPI's threadpool."""
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(global_settings.DB_URL, **_engine_kwargs(global_settings.DB_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_sync_db():
    """Yield a database session and close it when the request is done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create all tables (and indexes) that do not exist yet."""
    # Import models so they are registered with Base.metadata
    from timeclock.fastapi import models  # noqa: F401

    logger.info("Creating database tables")
    Base.metadata.create_all(bind=engine)
