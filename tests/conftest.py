import os

import pytest

# Required by the env loader; real values come from .env.dev or the environment.
os.environ.setdefault("ENV", "dev")
os.environ.setdefault("DATABASE_URL", "postgresql://localhost:5432/hypeshelf_test")
os.environ.setdefault("IDENTITY_PROVIDER_URL", "http://localhost:8080")
os.environ.setdefault("JWT_AUDIENCE", "test-audience")

from hypeshelf.app import env_loader  # noqa: E402, F401

from ._factories import (  # noqa: E402
    InMemoryUserStore,
    InMemoryRecommendationStore,
    FakeBlobStore,
)


class AccidentalDatabaseAccessError(Exception):
    """Raised when a unit test accidentally tries to access the database."""

    pass


def _raise_db_access_error(*args, **kwargs):
    """Raise an error when DB access is attempted in unit tests."""
    raise AccidentalDatabaseAccessError(
        "Unit test attempted to connect to the database! "
        "Either mock the database call with @patch('hypeshelf.db.users.get_db_cursor') "
        "or similar, or mark this test as @pytest.mark.e2e if it requires real DB access."
    )


@pytest.fixture(autouse=True)
def prevent_db_access_in_unit_tests(request, monkeypatch):
    """Prevent accidental database access in unit tests.

    For e2e tests (marked with @pytest.mark.e2e), it does nothing. For all
    other tests, it patches psycopg.connect to raise a clear error if any code
    path tries to access the database without proper mocking.
    """
    markers = [marker.name for marker in request.node.iter_markers()]
    if "e2e" in markers:
        yield
        return

    monkeypatch.setattr("psycopg.connect", _raise_db_access_error)
    yield


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def recommendation_store() -> InMemoryRecommendationStore:
    return InMemoryRecommendationStore()


@pytest.fixture
def blob_store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture(scope="session")
def fields_factory():
    from ._factories import RecommendationFieldsFactory

    return RecommendationFieldsFactory()
