import os
import tempfile
from pathlib import Path

# Set environment variables BEFORE any imports that might use settings
# Use a temporary directory for test database to avoid permission issues
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_households.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"
os.environ["USER_SERVICE_URL"] = "http://users.test"

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session

from household_service.api.deps import get_db, get_user_directory
from household_service.errors import DirectoryUnavailableError
from household_service.main import app
from household_service.schemas.user import User

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class FakeUserDirectory:
    """In-memory stand-in for the user service."""

    def __init__(self, user_ids=()):
        self.users: dict[str, User] = {}
        self.available = True
        self.calls: list[str] = []
        for user_id in user_ids:
            self.add(user_id)

    def add(self, user_id: str, **fields) -> User:
        user = User(id=user_id, **fields)
        self.users[user_id] = user
        return user

    def remove(self, user_id: str) -> None:
        self.users.pop(user_id, None)

    def get_user(self, user_id: str) -> User | None:
        self.calls.append(user_id)
        if not self.available:
            raise DirectoryUnavailableError(
                "User service unreachable", f"/users/{user_id}"
            )
        return self.users.get(user_id)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test and run migrations."""
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    test_engine = create_engine(
        test_db_url,
        connect_args={"check_same_thread": False},
    )

    # Enable WAL mode to reduce locking issues, and enforce foreign keys
    @event.listens_for(test_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=test_engine
    )

    # Run Alembic migrations to set up the database schema
    alembic_cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    command.upgrade(alembic_cfg, "head")

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        test_engine.dispose()

        for suffix in ["", "-wal", "-shm"]:
            path = f"{test_db_path}{suffix}"
            if os.path.exists(path):
                os.remove(path)
        if os.path.exists(temp_db_dir):
            os.rmdir(temp_db_dir)


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


@pytest.fixture(scope="function")
def directory() -> FakeUserDirectory:
    """A user directory knowing users u1, u2 and u3."""
    return FakeUserDirectory(["u1", "u2", "u3"])


@pytest.fixture(scope="function")
def client(db_session, directory):
    """Create a test client with database and user directory overrides."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_user_directory] = lambda: directory

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def household_payload() -> dict:
    return {
        "name": "Smiths",
        "owner_id": "u1",
        "first_address_line": "123 Main St",
        "second_address_line": "",
        "city": "Ames",
        "state": "IA",
        "zip_code": 50010,
    }


@pytest.fixture(scope="function")
def household(client, household_payload) -> dict:
    """A household owned by u1, created through the API."""
    response = client.post("/api/v1/households", json=household_payload)
    assert response.status_code == 201
    return response.json()
