"""
Tests for annual goal endpoints.
"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def goal(client: TestClient, auth_headers: dict) -> dict:
    response = client.post(
        "/annual-goals", json={"title": "Read 20 books", "year": 2025}, headers=auth_headers
    )
    assert response.status_code == 201
    return response.json()


class TestAnnualGoals:

    def test_new_goal_is_active(self, goal: dict):
        assert goal["status"] == "ACTIVE"
        assert goal["description"] == ""

    def test_invalid_year(self, client: TestClient, auth_headers: dict):
        response = client.post(
            "/annual-goals", json={"title": "Someday", "year": 12}, headers=auth_headers
        )

        assert response.status_code == 422

    def test_list_newest_year_first(self, client: TestClient, auth_headers: dict, goal: dict):
        client.post("/annual-goals", json={"title": "Run a marathon", "year": 2026}, headers=auth_headers)

        data = client.get("/annual-goals", headers=auth_headers).json()

        assert [g["year"] for g in data] == [2026, 2025]

    def test_partial_update(self, client: TestClient, auth_headers: dict, goal: dict):
        response = client.patch(
            f"/annual-goals/{goal['id']}", json={"status": "COMPLETED"}, headers=auth_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "COMPLETED"
        assert data["title"] == "Read 20 books"

    def test_invalid_status(self, client: TestClient, auth_headers: dict, goal: dict):
        response = client.patch(
            f"/annual-goals/{goal['id']}", json={"status": "PAUSED"}, headers=auth_headers
        )

        assert response.status_code == 422

    def test_other_user_cannot_update(
        self, client: TestClient, other_auth_headers: dict, goal: dict
    ):
        """Should answer 404, not 403, for someone else's goal."""
        response = client.patch(
            f"/annual-goals/{goal['id']}", json={"title": "Mine"}, headers=other_auth_headers
        )

        assert response.status_code == 404

    def test_delete(self, client: TestClient, auth_headers: dict, goal: dict):
        response = client.delete(f"/annual-goals/{goal['id']}", headers=auth_headers)

        assert response.status_code == 204
        assert client.get("/annual-goals", headers=auth_headers).json() == []
