import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("EMAIL_PROVIDER", "logging")
os.environ.setdefault("REDIS_HOST", "")
os.environ.setdefault("FIREBASE_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from lvlup.database import Base, get_db
from lvlup.main import app
from lvlup.middleware.rate_limit import limiter
from lvlup import crud
import lvlup.models  # noqa: F401

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

limiter.enabled = False


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def second_session(db_session):
    """Another session on the same database, for interleaved writes."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user(db_session):
    return crud.create_user(db_session, "user-alice", "alice@example.com", "Alice")


@pytest.fixture
def other_user(db_session):
    return crud.create_user(db_session, "user-bob", "bob@example.com", "Bob")


@pytest.fixture
def auth_headers(user):
    return {"X-User-ID": user.id}
