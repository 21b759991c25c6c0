import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from timeclock.fastapi.core.init_settings import global_settings
from timeclock.fastapi.dependencies.database import init_db, SessionLocal
from timeclock.fastapi.crud.user import UserCRUD
from timeclock.fastapi.schemas.user import UserCreate

logger = logging.getLogger(__name__)


def ensure_initial_admin(db) -> None:
    """Create or promote the configured administrator when no active admin exists."""
    crud = UserCRUD(db)
    admin_count = crud.count_admins()
    if admin_count > 0:
        logger.info("Found %d existing admin(s)", admin_count)
        return

    existing = crud.get_user_by_email(global_settings.INITIAL_ADMIN_EMAIL)
    if existing:
        # Email already taken by an employee or a deactivated admin
        existing.is_admin = True
        existing.is_active = True
        db.commit()
        db.refresh(existing)
        logger.warning("Promoted existing user %s (%s) to initial admin", existing.id, existing.email)
        return

    admin = crud.create_user(UserCreate(
        first_name=global_settings.INITIAL_ADMIN_FIRST_NAME,
        last_name=global_settings.INITIAL_ADMIN_LAST_NAME,
        email=global_settings.INITIAL_ADMIN_EMAIL,
        is_admin=True,
        is_active=True
    ))
    logger.warning("Created initial admin user %s (%s); run create_admin.py to get a token",
                   admin.id, admin.email)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables and indexes
    init_db()

    db = SessionLocal()
    try:
        ensure_initial_admin(db)
    finally:
        db.close()

    yield
