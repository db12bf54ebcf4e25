"""Shared fixtures: an in-memory SQLite database and API test clients."""

import os

os.environ.setdefault("ENV", "test")
os.environ.setdefault("TEST_DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  registers tables on Base.metadata
from app.db import Base, get_db
from app.main import create_app
from app.storage.memory import InMemoryConversationBackend
from app.storage.sql import SQLConversationBackend

pytest_plugins = [
    "tests.fixtures.conversation_fixtures",
]


@pytest.fixture(scope="session")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db(engine):
    """Fresh schema per test so records never leak between tests."""
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def sql_backend(db):
    return SQLConversationBackend(db)


@pytest.fixture(scope="function")
def memory_backend():
    return InMemoryConversationBackend()


@pytest.fixture(params=["memory", "sql"])
def backend(request):
    """Run a test once against each storage backend."""
    if request.param == "memory":
        return request.getfixturevalue("memory_backend")
    return request.getfixturevalue("sql_backend")


@pytest.fixture
def client(db):
    """Client on the SQL backend with get_db bound to the test session."""
    app = create_app(testing=True)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def memory_client():
    """Client on a fresh in-memory backend."""
    app = create_app(testing=True, backend=InMemoryConversationBackend())
    with TestClient(app) as c:
        yield c
