"""
Test configuration and fixtures for pytest.

Every test runs against its own SQLite file under ``tmp_path`` so no
state leaks between tests.
"""
import pytest
from fastapi.testclient import TestClient

from hr_documents_api.app.core.config import settings
from hr_documents_api.app.core.db import init_db
from hr_documents_api.app.main import app


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    """Point the application at a fresh database with the schema applied."""
    db_path = tmp_path / "hr_documents_test.db"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    init_db()
    return db_path


@pytest.fixture
def client():
    """HTTP client for API testing."""
    with TestClient(app) as test_client:
        yield test_client
