"""
Tests for task endpoints.

These tests verify:
- Task creation (defaults, validation, project rules)
- Listing, retrieval and ownership
- Partial updates (presence semantics, remove_due_date)
- Deletion
- Dashboard

The calendar chain is replaced by the calendar_manager fixture, so these
tests only check what the API hands to it and how its answers are stored.
"""

from datetime import datetime
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.environments.base import APIError
from app.models.task import Task


@pytest.fixture
def test_task(db: Session, test_user) -> Task:
    task = Task(
        id=uuid4(),
        user_id=test_user.id,
        name="Study Session",
        start_date=datetime(2024, 3, 1, 10, 0, 0),
        google_calendar_event_id="evt_1",
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


class TestTaskCreate:
    """Tests for POST /tasks endpoint."""

    def test_create_task_defaults(self, client: TestClient, auth_headers: dict):
        response = client.post("/tasks", json={"name": "Read"}, headers=auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Read"
        assert data["status"] == "TODO"
        assert data["priority"] == "MEDIUM"
        assert data["type"] == "EVENT"
        assert data["google_calendar_event_id"] == ""

    def test_create_task_returns_event_id(
        self, client: TestClient, auth_headers: dict, calendar_manager
    ):
        """Should return the event id assigned by the calendar sync."""
        calendar_manager.sync_task.return_value = ("evt_42", None)

        response = client.post(
            "/tasks",
            json={"name": "Study Session", "start_date": "2024-03-01T10:00:00"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["google_calendar_event_id"] == "evt_42"
        assert response.json()["start_date"] == "2024-03-01T10:00:00"

    def test_calendar_failure_still_creates(
        self, client: TestClient, auth_headers: dict, calendar_manager
    ):
        calendar_manager.sync_task.return_value = ("", APIError("Google is down", status_code=503))

        response = client.post(
            "/tasks",
            json={"name": "Study Session", "start_date": "2024-03-01T10:00:00"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["google_calendar_event_id"] == ""

    def test_empty_date_means_not_provided(self, client: TestClient, auth_headers: dict):
        response = client.post(
            "/tasks", json={"name": "Read", "due_date": ""}, headers=auth_headers
        )

        assert response.status_code == 201
        assert response.json()["due_date"] is None

    def test_offset_is_dropped(self, client: TestClient, auth_headers: dict):
        response = client.post(
            "/tasks",
            json={"name": "Read", "start_date": "2024-03-01T10:00:00+02:00"},
            headers=auth_headers,
        )

        assert response.json()["start_date"] == "2024-03-01T10:00:00"

    def test_project_task_without_project(self, client: TestClient, auth_headers: dict):
        response = client.post(
            "/tasks", json={"name": "Chapter", "type": "PROJECT"}, headers=auth_headers
        )

        assert response.status_code == 400

    def test_project_of_other_user(
        self, client: TestClient, other_auth_headers: dict, test_project
    ):
        response = client.post(
            "/tasks",
            json={"name": "Chapter", "type": "PROJECT", "project_id": str(test_project.id)},
            headers=other_auth_headers,
        )

        assert response.status_code == 404

    def test_invalid_status(self, client: TestClient, auth_headers: dict):
        response = client.post(
            "/tasks", json={"name": "Read", "status": "BLOCKED"}, headers=auth_headers
        )

        assert response.status_code == 422

    def test_empty_name(self, client: TestClient, auth_headers: dict):
        response = client.post("/tasks", json={"name": ""}, headers=auth_headers)

        assert response.status_code == 422

    def test_without_auth(self, client: TestClient):
        response = client.post("/tasks", json={"name": "Read"})

        assert response.status_code in (401, 403)


class TestTaskRead:
    """Tests for GET /tasks and GET /tasks/{task_id}."""

    def test_list_only_own_tasks(
        self, client: TestClient, auth_headers: dict, other_auth_headers: dict, test_task: Task
    ):
        assert len(client.get("/tasks", headers=auth_headers).json()) == 1
        assert client.get("/tasks", headers=other_auth_headers).json() == []

    def test_get_task(self, client: TestClient, auth_headers: dict, test_task: Task):
        response = client.get(f"/tasks/{test_task.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["google_calendar_event_id"] == "evt_1"

    def test_get_task_of_other_user(
        self, client: TestClient, other_auth_headers: dict, test_task: Task
    ):
        """Should look exactly like a missing task."""
        response = client.get(f"/tasks/{test_task.id}", headers=other_auth_headers)

        assert response.status_code == 404

    def test_get_task_invalid_id(self, client: TestClient, auth_headers: dict):
        response = client.get("/tasks/not-a-uuid", headers=auth_headers)

        assert response.status_code == 400


class TestTaskUpdate:
    """Tests for PATCH /tasks/{task_id}."""

    def test_status_only(
        self, client: TestClient, auth_headers: dict, test_task: Task, calendar_manager
    ):
        response = client.patch(
            f"/tasks/{test_task.id}", json={"status": "DONE"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["status"] == "DONE"
        calendar_manager.sync_task.assert_not_awaited()

    def test_name_change_syncs(
        self, client: TestClient, auth_headers: dict, test_task: Task, calendar_manager
    ):
        calendar_manager.sync_task.return_value = ("evt_1", None)

        response = client.patch(
            f"/tasks/{test_task.id}", json={"name": "Exam prep"}, headers=auth_headers
        )

        assert response.json()["name"] == "Exam prep"
        calendar_manager.sync_task.assert_awaited_once()

    def test_empty_name_ignored(self, client: TestClient, auth_headers: dict, test_task: Task):
        response = client.patch(f"/tasks/{test_task.id}", json={"name": ""}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["name"] == "Study Session"

    def test_remove_due_date(
        self, client: TestClient, auth_headers: dict, db: Session, test_task: Task, calendar_manager
    ):
        test_task.due_date = datetime(2024, 3, 1, 12, 0, 0)
        db.commit()
        calendar_manager.sync_task.return_value = ("evt_1", None)

        response = client.patch(
            f"/tasks/{test_task.id}", json={"remove_due_date": True}, headers=auth_headers
        )

        assert response.json()["due_date"] is None
        calendar_manager.sync_task.assert_awaited_once()

    def test_event_deleted_clears_id(
        self, client: TestClient, auth_headers: dict, test_task: Task, calendar_manager
    ):
        """The manager reports the event gone: the task is no longer mirrored."""
        calendar_manager.sync_task.return_value = ("", None)

        response = client.patch(
            f"/tasks/{test_task.id}", json={"description": "new notes"}, headers=auth_headers
        )

        assert response.json()["google_calendar_event_id"] == ""

    def test_update_other_users_task(
        self, client: TestClient, other_auth_headers: dict, test_task: Task
    ):
        response = client.patch(
            f"/tasks/{test_task.id}", json={"name": "Mine now"}, headers=other_auth_headers
        )

        assert response.status_code == 404


class TestTaskDelete:
    """Tests for DELETE /tasks/{task_id}."""

    def test_delete_task(
        self, client: TestClient, auth_headers: dict, test_task: Task, calendar_manager
    ):
        response = client.delete(f"/tasks/{test_task.id}", headers=auth_headers)

        assert response.status_code == 204
        assert client.get(f"/tasks/{test_task.id}", headers=auth_headers).status_code == 404
        calendar_manager.remove_task.assert_awaited_once()

    def test_delete_missing_task(self, client: TestClient, auth_headers: dict):
        response = client.delete(f"/tasks/{uuid4()}", headers=auth_headers)

        assert response.status_code == 404


class TestDashboard:
    """Tests for GET /tasks/dashboard."""

    def test_empty_dashboard(self, client: TestClient, auth_headers: dict):
        response = client.get("/tasks/dashboard", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["stats"] == {"total": 0, "todo": 0, "in_progress": 0, "done": 0, "overdue": 0}
        assert data["type"] == {"event": 0, "study": 0, "project": 0}
        assert data["month"] == []
        assert data["last_tasks"] == []

    def test_dashboard_counts(self, client: TestClient, auth_headers: dict):
        client.post("/tasks", json={"name": "a", "type": "STUDY"}, headers=auth_headers)
        client.post("/tasks", json={"name": "b", "status": "DONE"}, headers=auth_headers)
        client.post(
            "/tasks",
            json={"name": "c", "due_date": datetime.now().replace(microsecond=0).isoformat()},
            headers=auth_headers,
        )

        data = client.get("/tasks/dashboard", headers=auth_headers).json()

        assert data["stats"]["total"] == 3
        assert data["stats"]["done"] == 1
        assert data["type"]["study"] == 1
        assert [t["name"] for t in data["month"]] == ["c"]
        assert len(data["last_tasks"]) == 3
