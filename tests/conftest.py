"""
Test configuration and fixtures for the short URL app.
This centralizes all test setup, making individual tests clean.
"""

import os

# Configure the app before anything imports settings
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("SESSION_BACKEND", "memory")
os.environ.setdefault("SHORT_CODE_STRATEGY", "random")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from main import app
from shorturl_app.database.connection import Base, get_db
from shorturl_app.sessions.strategies import InMemorySessionStore
from helpers import register, login

# Test database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    This ensures tests are isolated and don't affect each other.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def session_store():
    return InMemorySessionStore()


@pytest.fixture(scope="function")
def client(db_session, session_store):
    """
    Create a test client with the database and session store replaced.
    This is the main fixture that tests will use.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        # The lifespan has run by now; swap in a per-test store
        app.state.session_store = session_store
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def alice(client):
    """A client logged in as alice"""
    register(client)
    login(client)
    return client


@pytest.fixture
def other_client(client, session_store):
    """A second browser with its own cookie jar, logged in as bob"""
    with TestClient(app) as second:
        app.state.session_store = session_store
        register(second, "bob", "pw2")
        login(second, "bob", "pw2")
        yield second
