"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient

from prooflog.config import Settings
from prooflog.database import Base, Database, get_db
from prooflog.main import create_app


class AuthHeaders(dict):
    """Dict subclass that also stores the account it authenticates."""

    def __init__(self, *args, user_id: str | None = None, email: str = "", handle: str = "",
                 token: str = "", **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email
        self.handle = handle
        self.token = token


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").rsplit("/", 1)[0] + "/prooflog_test"
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

TEST_BUCKET = "prooflog-test"

test_settings = Settings(
    database_url=SQLALCHEMY_DATABASE_URL,
    aws_region="us-east-1",
    aws_access_key_id="testing",
    aws_secret_access_key="testing",
    s3_bucket_name=TEST_BUCKET,
    jwt_secret="test-only-secret",
    environment="development",
)
app = create_app(test_settings)
database: Database = app.state.database


@pytest.fixture
def settings():
    """Settings the test application was built with."""
    return test_settings


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    database.create_all()
    yield
    database.dispose()


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = database.session()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register an account and return cookie headers for it."""

    def _register(email: str, password: str = "testpass123") -> AuthHeaders:
        response = client.post(
            "/api/v1/auth/register", json={"email": email, "password": password}
        )
        assert response.status_code == 201
        token = response.cookies["token"]
        user = response.json()["user"]
        # Requests authenticate explicitly through the returned headers
        client.cookies.clear()
        return AuthHeaders(
            {"Cookie": f"token={token}"},
            user_id=user["id"],
            email=user["email"],
            handle=user["handle"],
            token=token,
        )

    return _register


@pytest.fixture
def auth_headers(register):
    """Create an account and return auth headers with its info."""
    return register("test@example.com")


@pytest.fixture
def other_headers(register):
    """A second, unrelated account."""
    return register("intruder@example.org")


@pytest.fixture
def create_entry(client):
    """Create an entry through the API and return its JSON."""

    def _create_entry(headers: AuthHeaders, **overrides) -> dict:
        payload = {
            "type": "Project",
            "title": "Portfolio site",
            "description": "Built with FastAPI",
            "date": "2026-01-01",
            "tags": ["python"],
            "visibility": "private",
        }
        payload.update(overrides)
        response = client.post("/api/v1/entries", headers=headers, json=payload)
        assert response.status_code == 201, response.text
        return response.json()["entry"]

    return _create_entry
