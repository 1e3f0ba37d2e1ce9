"""
Pytest fixtures for the KAM admin test suite.

The app runs against a throwaway SQLite file (aiosqlite). Settings are read
at import time, so the environment is prepared before anything from
kam_admin is imported.
"""
import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="kam_admin_tests_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/kam_test.db"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["FIRST_ADMIN_EMAIL"] = "admin@kamcorp.com"
os.environ["FIRST_ADMIN_PASSWORD"] = "admin-pass-123"
os.environ["FIRST_ADMIN_NAME"] = "Asha Admin"

import pytest
from fastapi.testclient import TestClient

from kam_admin.database import Base, engine
from kam_admin.main import app, startup_event

from helpers import ADMIN_EMAIL, ADMIN_PASSWORD, EMPLOYEE_PASSWORD, SAMPLE_ROWS, login, xlsx_bytes


async def _reset_database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await startup_event()


@pytest.fixture(scope="session")
def app_client():
    with TestClient(app) as client:
        yield client


@pytest.fixture
def client(app_client):
    app_client.portal.call(_reset_database)
    return app_client


@pytest.fixture
def admin_headers(client):
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def make_employee(client, admin_headers):
    def _make(name, poc=None, email=None):
        username = name.lower().replace(" ", ".")
        email = email or f"{username}@kamcorp.com"
        payload = {
            "email": email,
            "username": username,
            "name": name,
            "password": EMPLOYEE_PASSWORD,
            "confirm_password": EMPLOYEE_PASSWORD,
            "role": "employee",
        }
        if poc is not None:
            payload["poc"] = poc
        response = client.post("/admin/accounts", json=payload, headers=admin_headers)
        assert response.status_code == 200, response.text
        return login(client, email, EMPLOYEE_PASSWORD)
    return _make


@pytest.fixture
def imported(client, admin_headers):
    """Import SAMPLE_ROWS as the admin."""
    files = {"file": ("performance.xlsx", xlsx_bytes(SAMPLE_ROWS))}
    response = client.post("/performance/import", files=files, headers=admin_headers)
    assert response.status_code == 200, response.text
    return response.json()
