"""
Shared fixtures: an isolated in-memory database per test and an API client
wired to it.
"""

import os

# Settings are read at import time
os.environ.setdefault("ENV_MODE", "dev")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TIMEZONE"] = "UTC"

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from timeclock.fastapi.dependencies.database import Base, get_sync_db
from timeclock.fastapi.main import app
from timeclock.fastapi.models import User
from timeclock.security.auth import create_user_token

# Wednesday; the reporting week started Sunday 2026-10-18 00:00 UTC
REFERENCE_NOW = datetime(2026, 10, 21, 12, 0)

SIGNATURE = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make_user(is_admin=False, is_active=True, **fields):
        counter["n"] += 1
        user = User(
            first_name=fields.pop("first_name", f"User{counter['n']}"),
            last_name=fields.pop("last_name", "Tester"),
            email=fields.pop("email", f"user{counter['n']}@example.com"),
            is_admin=is_admin,
            is_active=is_active,
            **fields,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def employee(make_user):
    return make_user()


@pytest.fixture
def admin(make_user):
    return make_user(is_admin=True, first_name="Ada", last_name="Admin")


def auth_headers(user):
    token = create_user_token(str(user.id), is_admin=user.is_admin)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(session_factory):
    def override_get_sync_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_sync_db] = override_get_sync_db
    yield TestClient(app)
    app.dependency_overrides.clear()
