import pytest
from fastapi.testclient import TestClient

from hypeshelf.app.app import app
from hypeshelf.app.dependencies import (
    image_gateway,
    recommendation_gateway,
    role_admin_gateway,
)
from hypeshelf.core.images import ImageGateway
from hypeshelf.core.recommendations import RecommendationGateway
from hypeshelf.core.roles import RoleAdministrationGateway


# Bearer tokens accepted by the mocked validator, and the claims they carry.
TOKEN_CLAIMS = {
    "alice_token": {"sub": "user_alice", "name": "Alice"},
    "bob_token": {"sub": "user_bob", "username": "bob"},
    "admin_token": {"sub": "user_admin", "name": "Admin"},
}


@pytest.fixture
def stores(user_store, recommendation_store, blob_store):
    """Wire the app to in-memory stores and a mocked token validator.

    The admin identity is seeded as an existing admin record.
    """

    def mock_validate(token: str):
        return TOKEN_CLAIMS.get(token)

    # Important: mock at the location where it's imported, not where it's defined
    from hypeshelf.app import oauth

    original_validate = oauth.validate_jwt_token
    oauth.validate_jwt_token = mock_validate
    app.dependency_overrides[recommendation_gateway] = lambda: RecommendationGateway(
        users=user_store, recommendations=recommendation_store
    )
    app.dependency_overrides[role_admin_gateway] = lambda: RoleAdministrationGateway(
        users=user_store
    )
    app.dependency_overrides[image_gateway] = lambda: ImageGateway(
        users=user_store, blobs=blob_store
    )
    user_store.add_user("user_admin", role="admin", display_name="Admin")

    try:
        yield user_store, recommendation_store, blob_store
    finally:
        oauth.validate_jwt_token = original_validate
        app.dependency_overrides.clear()


def _client(token: str | None = None) -> TestClient:
    client = TestClient(app)
    if token:
        client.headers = {"Authorization": f"Bearer {token}"}
    return client


@pytest.fixture
def client(stores) -> TestClient:
    """Unauthenticated test client."""
    return _client()


@pytest.fixture
def alice_client(stores) -> TestClient:
    return _client("alice_token")


@pytest.fixture
def bob_client(stores) -> TestClient:
    return _client("bob_token")


@pytest.fixture
def admin_client(stores) -> TestClient:
    return _client("admin_token")


@pytest.fixture
def bad_token_client(stores) -> TestClient:
    return _client("invalid_token")


@pytest.fixture
def recommendation_body():
    return {
        "title": "Heat",
        "genre": "Action",
        "link": "https://www.imdb.com/title/tt0113277/",
        "blurb": "A tense cat-and-mouse crime epic with a legendary shootout.",
    }
