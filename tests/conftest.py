"""
pytest configuration and fixtures for the User CRUD API tests.

Every test gets its own SQLite file under ``tmp_path`` so tests never
share users or ids.
"""

import pytest
from fastapi.testclient import TestClient

from user_crud_api.app.core.config import settings
from user_crud_api.app.core.db import init_db
from user_crud_api.app.main import app


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the application at a fresh, migrated database file."""
    db_path = tmp_path / "users.db"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    init_db()
    return db_path


@pytest.fixture
def client(database):
    """HTTP client running the application's startup and shutdown."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def ada():
    return {"email": "ada@lovelace.io", "firstName": "Ada", "lastName": "Lovelace"}


@pytest.fixture
def grace():
    return {"email": "grace@hopper.io", "firstName": "Grace", "lastName": "Hopper"}
