"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from finny.api.main import create_app
from finny.infrastructure.database.models import Base
from finny.infrastructure.database.session import get_db
from helpers import register

# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def app(db: Session) -> FastAPI:
    """FastAPI app wired to the test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Anonymous test client"""
    return TestClient(app)


@pytest.fixture
def auth_client(app: FastAPI) -> TestClient:
    """Client signed in as alex@example.com"""
    client = TestClient(app)
    register(client, "alex@example.com", name="Alex")
    return client


@pytest.fixture
def other_client(app: FastAPI) -> TestClient:
    """Client signed in as a second, unrelated user"""
    client = TestClient(app)
    register(client, "sam@example.com", name="Sam")
    return client
