"""
Tests for study subject endpoints and the subject link of study topics.
"""

from uuid import uuid4

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.models.quiz import Quiz
from app.models.study_topic import StudyTopic


class TestStudySubjects:
    """Tests for /study-subjects."""

    def test_create_and_list(self, client: TestClient, auth_headers: dict):
        response = client.post(
            "/study-subjects", json={"name": "Physics", "description": "Year 2"}, headers=auth_headers
        )

        assert response.status_code == 201
        assert response.json()["description"] == "Year 2"
        names = [s["name"] for s in client.get("/study-subjects", headers=auth_headers).json()]
        assert names == ["Physics"]

    def test_empty_name(self, client: TestClient, auth_headers: dict):
        response = client.post("/study-subjects", json={"name": ""}, headers=auth_headers)

        assert response.status_code == 422

    def test_get_subject(self, client: TestClient, auth_headers: dict, test_study_subject):
        response = client.get(f"/study-subjects/{test_study_subject.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["name"] == "Mathematics"

    def test_get_subject_of_other_user(
        self, client: TestClient, other_auth_headers: dict, test_study_subject
    ):
        response = client.get(f"/study-subjects/{test_study_subject.id}", headers=other_auth_headers)

        assert response.status_code == 404

    def test_list_is_per_user(
        self, client: TestClient, other_auth_headers: dict, test_study_subject
    ):
        assert client.get("/study-subjects", headers=other_auth_headers).json() == []


class TestSubjectTopics:
    """Tests for the link between study topics and subjects."""

    def test_topic_in_subject(self, client: TestClient, auth_headers: dict, test_study_subject):
        response = client.post(
            "/study-topics",
            json={"name": "Calculus", "subject_id": str(test_study_subject.id)},
            headers=auth_headers,
        )
        client.post("/study-topics", json={"name": "Loose topic"}, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["subject_id"] == str(test_study_subject.id)
        topics = client.get(f"/study-subjects/{test_study_subject.id}/topics", headers=auth_headers)
        assert [t["name"] for t in topics.json()] == ["Calculus"]

    def test_topic_without_subject(self, client: TestClient, auth_headers: dict):
        response = client.post("/study-topics", json={"name": "Loose topic"}, headers=auth_headers)

        assert response.json()["subject_id"] is None

    def test_topic_in_other_users_subject(
        self, client: TestClient, other_auth_headers: dict, test_study_subject
    ):
        response = client.post(
            "/study-topics",
            json={"name": "Calculus", "subject_id": str(test_study_subject.id)},
            headers=other_auth_headers,
        )

        assert response.status_code == 404

    def test_topics_of_unknown_subject(self, client: TestClient, auth_headers: dict):
        response = client.get(f"/study-subjects/{uuid4()}/topics", headers=auth_headers)

        assert response.status_code == 404


class TestDeleteSubject:
    """Deleting a subject removes its quizzes and unlinks its topics."""

    def test_delete_subject(
        self, client: TestClient, auth_headers: dict, db: Session, test_user, test_study_subject
    ):
        topic = StudyTopic(user_id=test_user.id, name="Calculus", subject_id=test_study_subject.id)
        quiz = Quiz(user_id=test_user.id, subject_id=test_study_subject.id, topic="Limits")
        db.add_all([topic, quiz])
        db.commit()
        topic_id = topic.id

        response = client.delete(f"/study-subjects/{test_study_subject.id}", headers=auth_headers)

        assert response.status_code == 204
        db.expire_all()
        assert db.query(Quiz).count() == 0
        kept = db.get(StudyTopic, topic_id)
        assert kept is not None
        assert kept.subject_id is None

    def test_delete_other_users_subject(
        self, client: TestClient, other_auth_headers: dict, test_study_subject
    ):
        response = client.delete(f"/study-subjects/{test_study_subject.id}", headers=other_auth_headers)

        assert response.status_code == 404
