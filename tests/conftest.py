"""Shared fixtures."""

import os
import tempfile

# Must be set before hackbox.config is imported
os.environ.setdefault("HACKBOX_DATA_DIR", tempfile.mkdtemp(prefix="hackbox-test-"))
os.environ.setdefault("ADMIN_API_KEY", "test-admin-key")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hackbox.db import Base, get_db, seed_tasks
from hackbox.sandbox import SandboxExecutor


@pytest.fixture
def executor():
    return SandboxExecutor(timeout_seconds=5, memory_mb=256)


@pytest.fixture
def db_session():
    """In-memory database seeded with the bundled tasks."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    seed_tasks(db)
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    from fastapi.testclient import TestClient
    from hackbox.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
