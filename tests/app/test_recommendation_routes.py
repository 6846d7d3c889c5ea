"""Tests for the recommendation endpoints."""

import pytest
from fastapi.testclient import TestClient


def _create(client: TestClient, body: dict) -> str:
    response = client.post("/recommendations", json=body)
    assert response.status_code == 201, response.text
    return response.json()["id"]


class TestCreate:
    def test_create_and_list(self, alice_client, recommendation_body):
        rec_id = _create(alice_client, recommendation_body)

        response = alice_client.get("/recommendations")

        assert response.status_code == 200
        data = response.json()
        assert data["current_user_id"] == "user_alice"
        assert data["user_role"] == "user"
        assert data["user_id"] is not None
        [rec] = data["recommendations"]
        assert rec["id"] == rec_id
        assert rec["author_id"] == "user_alice"
        assert rec["author_name"] == "Alice"
        assert rec["is_staff_pick"] is False

    def test_username_claim_used_as_author_name(self, bob_client, recommendation_body):
        _create(bob_client, recommendation_body)

        [rec] = bob_client.get("/recommendations").json()["recommendations"]
        assert rec["author_name"] == "bob"

    def test_validation_error(self, alice_client, recommendation_body):
        body = {**recommendation_body, "link": "ftp://example.com/file"}

        response = alice_client.post("/recommendations", json=body)

        assert response.status_code == 400
        assert response.json()["kind"] == "validation"
        assert "URL" in response.json()["detail"]

    @pytest.mark.parametrize("missing", ["title", "genre", "link", "blurb"])
    def test_missing_field(self, alice_client, recommendation_body, missing):
        body = {k: v for k, v in recommendation_body.items() if k != missing}

        response = alice_client.post("/recommendations", json=body)

        assert response.status_code == 400
        assert response.json()["kind"] == "validation"
        assert "required" in response.json()["detail"]

    def test_lowercase_genre_rejected(self, alice_client, recommendation_body):
        body = {**recommendation_body, "genre": "action"}

        response = alice_client.post("/recommendations", json=body)

        assert response.status_code == 400

    def test_staff_pick_cannot_be_set_on_create(self, alice_client, recommendation_body):
        _create(alice_client, {**recommendation_body, "is_staff_pick": True})

        [rec] = alice_client.get("/recommendations").json()["recommendations"]
        assert rec["is_staff_pick"] is False


class TestPublicListing:
    def test_no_author_id(self, client, alice_client, recommendation_body):
        _create(alice_client, recommendation_body)

        response = client.get("/recommendations/public", params={"count": 10})

        assert response.status_code == 200
        [rec] = response.json()
        assert "author_id" not in rec
        assert rec["author_name"] == "Alice"

    def test_count_clamped(self, client, alice_client, recommendation_body):
        for i in range(3):
            _create(alice_client, {**recommendation_body, "title": f"Film {i}"})

        assert len(client.get("/recommendations/public", params={"count": 0}).json()) == 1
        assert len(client.get("/recommendations/public", params={"count": 500}).json()) == 3

    def test_genres(self, client, alice_client, recommendation_body):
        _create(alice_client, {**recommendation_body, "genre": "Drama"})
        _create(alice_client, {**recommendation_body, "genre": "Action"})

        assert client.get("/recommendations/genres").json() == ["Action", "Drama"]


class TestGenreFilter:
    def test_filter(self, alice_client, recommendation_body):
        _create(alice_client, {**recommendation_body, "genre": "Drama"})
        _create(alice_client, recommendation_body)

        data = alice_client.get("/recommendations", params={"genre": "Drama"}).json()

        assert [r["genre"] for r in data["recommendations"]] == ["Drama"]

    def test_empty_filter_returns_everything(self, alice_client, recommendation_body):
        _create(alice_client, {**recommendation_body, "genre": "Drama"})
        _create(alice_client, recommendation_body)

        data = alice_client.get("/recommendations", params={"genre": ""}).json()

        assert len(data["recommendations"]) == 2

    def test_invalid_filter_returns_empty(self, alice_client, recommendation_body):
        _create(alice_client, recommendation_body)

        response = alice_client.get("/recommendations", params={"genre": "Western"})

        assert response.status_code == 200
        assert response.json()["recommendations"] == []


class TestUpdateAndDelete:
    def test_owner_updates(self, alice_client, recommendation_body):
        rec_id = _create(alice_client, recommendation_body)

        response = alice_client.put(
            f"/recommendations/{rec_id}", json={**recommendation_body, "title": "Heat (1995)"}
        )

        assert response.status_code == 200
        assert response.json() == {"id": rec_id}
        [rec] = alice_client.get("/recommendations").json()["recommendations"]
        assert rec["title"] == "Heat (1995)"

    def test_other_user_cannot_update(self, alice_client, bob_client, recommendation_body):
        rec_id = _create(alice_client, recommendation_body)

        response = bob_client.put(f"/recommendations/{rec_id}", json=recommendation_body)

        assert response.status_code == 403
        assert response.json()["kind"] == "authorization"

    def test_update_missing(self, alice_client, recommendation_body):
        response = alice_client.put(
            "/recommendations/00000000-0000-0000-0000-000000000000",
            json=recommendation_body,
        )

        assert response.status_code == 404
        assert response.json()["kind"] == "not_found"

    def test_malformed_id(self, alice_client):
        response = alice_client.delete("/recommendations/not-a-uuid")

        assert response.status_code == 422

    def test_delete_flow(self, alice_client, bob_client, admin_client, recommendation_body):
        rec_id = _create(alice_client, recommendation_body)

        assert bob_client.delete(f"/recommendations/{rec_id}").status_code == 403
        assert admin_client.delete(f"/recommendations/{rec_id}").status_code == 204
        assert alice_client.delete(f"/recommendations/{rec_id}").status_code == 404
        assert alice_client.get("/recommendations").json()["recommendations"] == []


class TestStaffPick:
    def test_admin_toggles(self, alice_client, admin_client, recommendation_body):
        rec_id = _create(alice_client, recommendation_body)

        response = admin_client.put(
            f"/recommendations/{rec_id}/staff-pick", json={"is_staff_pick": True}
        )

        assert response.status_code == 204
        [rec] = alice_client.get("/recommendations").json()["recommendations"]
        assert rec["is_staff_pick"] is True

    def test_author_cannot_toggle(self, alice_client, recommendation_body):
        rec_id = _create(alice_client, recommendation_body)

        response = alice_client.put(
            f"/recommendations/{rec_id}/staff-pick", json={"is_staff_pick": True}
        )

        assert response.status_code == 403
