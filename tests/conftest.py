import pytest
import os

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

from fastapi.testclient import TestClient
from leave_portal.core.config import Config
from leave_portal.main import create_app

VALID_SUBMISSION = {
    "name": "Priya Raman",
    "employee_id": "ATS0001",
    "leave_type": "vacational",
    "start_date": "2024-01-10",
    "end_date": "2024-01-15",
    "comments": "Family trip planned months ago",
}

@pytest.fixture(scope="function")
def settings(tmp_path):
    """A file-backed SQLite database per test; the lifespan provisions the schema."""
    return Config(
        environment="testing",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'leave_requests.db'}",
    )

@pytest.fixture(scope="function")
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c

@pytest.fixture(scope="function")
def submit(client):
    """Helper fixture posting a valid submission with selected fields overridden."""
    def _submit(**overrides):
        payload = {**VALID_SUBMISSION, **overrides}
        return client.post("/api/leave-requests", json=payload)
    return _submit
