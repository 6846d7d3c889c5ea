import os
from pathlib import Path
from typing import Iterator
import pytest
from testcontainers.postgres import PostgresContainer
from alembic.config import Config
from alembic import command
from fastapi.testclient import TestClient

# Ensure allowed environment for env_loader
os.environ.setdefault("ENV", "dev")


# Bearer tokens accepted by the mocked validator, and the claims they carry.
E2E_TOKEN_CLAIMS = {
    "alice_token": {"sub": "e2e_alice", "name": "Alice"},
    "bob_token": {"sub": "e2e_bob", "name": "Bob"},
    "carol_token": {"sub": "e2e_carol", "name": "Carol"},
    "admin_token": {"sub": "e2e_admin", "name": "Admin"},
}


@pytest.fixture(scope="session")
def db_url() -> Iterator[str]:
    """Start a Postgres container, run migrations, and return the DB URL."""
    with PostgresContainer("postgres:16") as pg:
        raw_url = pg.get_connection_url()
        # Normalize to psycopg3-compatible URL if needed
        url = raw_url.replace("postgresql+psycopg2://", "postgresql://")
        os.environ["DATABASE_URL"] = url

        # Run Alembic migrations against this database
        root_dir = Path(__file__).resolve().parents[2]
        alembic_cfg = Config(str(root_dir / "alembic.ini"))
        command.upgrade(alembic_cfg, "head")

        yield url


@pytest.fixture(scope="session")
def _mock_oauth(db_url: str) -> Iterator[None]:
    """Session-scoped token validation mock for E2E tests.

    Also seeds the admin identity, since admins can only be made by admins.
    """
    from hypeshelf.app import oauth
    from hypeshelf.db.users import create_user

    original_validate = oauth.validate_jwt_token

    def mock_validate(token: str) -> dict[str, str] | None:
        return E2E_TOKEN_CLAIMS.get(token)

    oauth.validate_jwt_token = mock_validate  # type: ignore[assignment]
    create_user("e2e_admin", "admin", "Admin")

    yield

    oauth.validate_jwt_token = original_validate


def _client(token: str | None = None) -> TestClient:
    from hypeshelf.app.app import app

    client = TestClient(app)
    if token:
        client.headers = {"Authorization": f"Bearer {token}"}
    return client


@pytest.fixture(scope="session")
def client(_mock_oauth: None) -> TestClient:
    """Unauthenticated test client."""
    return _client()


@pytest.fixture(scope="session")
def alice_client(_mock_oauth: None) -> TestClient:
    return _client("alice_token")


@pytest.fixture(scope="session")
def bob_client(_mock_oauth: None) -> TestClient:
    return _client("bob_token")


@pytest.fixture(scope="session")
def carol_client(_mock_oauth: None) -> TestClient:
    return _client("carol_token")


@pytest.fixture(scope="session")
def admin_client(_mock_oauth: None) -> TestClient:
    return _client("admin_token")
