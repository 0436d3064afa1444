"""
Shared fixtures.
Every test gets its own in-memory SQLite database, wired in through the
get_db_connection dependency override; admin auth is overridden for the
admin routes unless a test asks for the unauthenticated client.
"""

import os

os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "campus-access-test-secret-0123456789abcdef")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import insert

from campus_access.api.dependencies import get_db_connection, require_admin
from campus_access.database import DatabaseManager
from campus_access.main import app
from campus_access.models.tables import students
from campus_access.services.student_directory import student_directory


SEED_STUDENTS = [
    {"name": "John Doe", "email": "john@campus.edu", "card_uid": "RFID001",
     "has_paid": True, "card_status": "active", "category": "Secondary", "class_level": "S1"},
    {"name": "Jane Smith", "email": "jane@campus.edu", "card_uid": "RFID002",
     "has_paid": False, "card_status": "active", "category": "Secondary", "class_level": "S1"},
    {"name": "Mike Johnson", "email": "mike@campus.edu", "card_uid": "RFID003",
     "has_paid": True, "card_status": "blocked", "category": "Secondary", "class_level": "S2"},
    {"name": "Amy Brown", "email": "amy@campus.edu", "card_uid": "RFID004",
     "has_paid": False, "card_status": "blocked", "category": "Primary", "class_level": "P6"},
]


@pytest.fixture
def db():
    """Fresh in-memory database with the schema created."""
    manager = DatabaseManager("sqlite://")
    manager.create_schema()
    student_directory.clear()
    yield manager
    student_directory.clear()
    manager.dispose()


@pytest.fixture
def seeded_db(db):
    """Database holding the four reference students."""
    with db.get_connection() as conn:
        conn.execute(insert(students), SEED_STUDENTS)
    return db


@pytest.fixture
def conn(seeded_db):
    """Open transaction on the seeded database, for service level tests."""
    with seeded_db.get_connection() as connection:
        yield connection


def _override_db(manager):
    def _get_db_connection():
        with manager.get_connection() as connection:
            yield connection
    return _get_db_connection


@pytest.fixture
def anon_client(seeded_db):
    """HTTP client on the seeded database, no admin override."""
    app.dependency_overrides[get_db_connection] = _override_db(seeded_db)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def client(seeded_db):
    """HTTP client on the seeded database, logged in as an admin."""
    app.dependency_overrides[get_db_connection] = _override_db(seeded_db)
    app.dependency_overrides[require_admin] = lambda: {"id": 1, "username": "admin"}
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
