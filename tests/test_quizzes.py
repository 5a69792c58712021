"""
Tests for quiz endpoints.
"""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.models.quiz import QuizQuestion


def quiz_body(subject_id, questions=None, **quiz_fields) -> dict:
    if questions is None:
        questions = [
            {"content": "2 + 2?", "options": ["3", "4"], "correct_answer": "4"},
            {
                "content": "Derivative of x^2?",
                "options": ["x", "2x"],
                "correct_answer": "2x",
                "explanation": "Power rule",
            },
        ]
    return {"quiz": {"subject_id": str(subject_id), "topic": "Basics", **quiz_fields}, "questions": questions}


@pytest.fixture
def quiz(client: TestClient, auth_headers: dict, test_study_subject) -> dict:
    response = client.post("/quizzes", json=quiz_body(test_study_subject.id), headers=auth_headers)
    assert response.status_code == 201
    return response.json()


class TestCreateQuiz:
    """Tests for POST /quizzes."""

    def test_create_quiz(self, quiz: dict, test_study_subject):
        assert quiz["quiz"]["subject_id"] == str(test_study_subject.id)
        assert quiz["quiz"]["total_questions"] == 2
        assert quiz["quiz"]["correct_count"] == 0
        assert quiz["quiz"]["completed_at"] is None
        assert [q["order_index"] for q in quiz["questions"]] == [0, 1]
        assert quiz["questions"][1]["explanation"] == "Power rule"
        assert quiz["questions"][0]["options"] == ["3", "4"]

    def test_completed_quiz(self, client: TestClient, auth_headers: dict, test_study_subject):
        body = quiz_body(test_study_subject.id, correct_count=1, completed_at="2025-03-01T10:00:00Z")

        response = client.post("/quizzes", json=body, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["quiz"]["correct_count"] == 1
        assert response.json()["quiz"]["completed_at"] is not None

    def test_without_questions(self, client: TestClient, auth_headers: dict, test_study_subject):
        response = client.post(
            "/quizzes", json=quiz_body(test_study_subject.id, questions=[]), headers=auth_headers
        )

        assert response.status_code == 400
        assert client.get("/quizzes", headers=auth_headers).json() == []

    def test_without_subject(self, client: TestClient, auth_headers: dict):
        body = {"quiz": {"topic": "Basics"}, "questions": [{"content": "?", "options": ["a"], "correct_answer": "a"}]}

        response = client.post("/quizzes", json=body, headers=auth_headers)

        assert response.status_code == 422

    def test_other_users_subject(
        self, client: TestClient, other_auth_headers: dict, test_study_subject
    ):
        response = client.post("/quizzes", json=quiz_body(test_study_subject.id), headers=other_auth_headers)

        assert response.status_code == 404

    def test_explicit_order(self, client: TestClient, auth_headers: dict, test_study_subject):
        questions = [
            {"content": "Second", "options": ["a"], "correct_answer": "a", "order_index": 5},
            {"content": "First", "options": ["a"], "correct_answer": "a", "order_index": 1},
        ]

        response = client.post(
            "/quizzes", json=quiz_body(test_study_subject.id, questions=questions), headers=auth_headers
        )

        assert [q["content"] for q in response.json()["questions"]] == ["First", "Second"]


class TestReadQuiz:
    """Tests for GET /quizzes and GET /quizzes/{id}."""

    def test_get_quiz(self, client: TestClient, auth_headers: dict, quiz: dict):
        response = client.get(f"/quizzes/{quiz['quiz']['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert [q["content"] for q in response.json()["questions"]] == ["2 + 2?", "Derivative of x^2?"]

    def test_get_unknown_quiz(self, client: TestClient, auth_headers: dict):
        response = client.get(f"/quizzes/{uuid4()}", headers=auth_headers)

        assert response.status_code == 404

    def test_get_quiz_of_other_user(self, client: TestClient, other_auth_headers: dict, quiz: dict):
        response = client.get(f"/quizzes/{quiz['quiz']['id']}", headers=other_auth_headers)

        assert response.status_code == 404

    def test_list_newest_first(
        self, client: TestClient, auth_headers: dict, quiz: dict, test_study_subject
    ):
        body = quiz_body(test_study_subject.id)
        body["quiz"]["topic"] = "Advanced"
        client.post("/quizzes", json=body, headers=auth_headers)

        data = client.get("/quizzes", headers=auth_headers).json()

        assert [q["topic"] for q in data] == ["Advanced", "Basics"]
        assert "questions" not in data[0]

    def test_list_is_per_user(self, client: TestClient, other_auth_headers: dict, quiz: dict):
        assert client.get("/quizzes", headers=other_auth_headers).json() == []


class TestQuizQuestions:
    """Tests for adding and removing questions."""

    def test_add_question(self, client: TestClient, auth_headers: dict, quiz: dict):
        response = client.post(
            f"/quizzes/{quiz['quiz']['id']}/questions",
            json={"content": "3 * 3?", "options": ["6", "9"], "correct_answer": "9"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["message"] == "question added"
        assert response.json()["question"]["order_index"] == 2
        updated = client.get(f"/quizzes/{quiz['quiz']['id']}", headers=auth_headers).json()
        assert updated["quiz"]["total_questions"] == 3
        assert updated["questions"][-1]["content"] == "3 * 3?"

    def test_add_question_to_other_users_quiz(
        self, client: TestClient, other_auth_headers: dict, quiz: dict
    ):
        response = client.post(
            f"/quizzes/{quiz['quiz']['id']}/questions",
            json={"content": "?", "options": ["a"], "correct_answer": "a"},
            headers=other_auth_headers,
        )

        assert response.status_code == 404

    def test_delete_question(self, client: TestClient, auth_headers: dict, quiz: dict):
        question_id = quiz["questions"][0]["id"]

        response = client.delete(f"/quizzes/questions/{question_id}", headers=auth_headers)

        assert response.status_code == 204
        updated = client.get(f"/quizzes/{quiz['quiz']['id']}", headers=auth_headers).json()
        assert updated["quiz"]["total_questions"] == 1
        assert [q["id"] for q in updated["questions"]] == [quiz["questions"][1]["id"]]

    def test_delete_question_of_other_user(
        self, client: TestClient, other_auth_headers: dict, quiz: dict
    ):
        response = client.delete(
            f"/quizzes/questions/{quiz['questions'][0]['id']}", headers=other_auth_headers
        )

        assert response.status_code == 404


class TestDeleteQuiz:

    def test_delete_quiz_removes_questions(
        self, client: TestClient, auth_headers: dict, db: Session, quiz: dict
    ):
        response = client.delete(f"/quizzes/{quiz['quiz']['id']}", headers=auth_headers)

        assert response.status_code == 204
        assert client.get(f"/quizzes/{quiz['quiz']['id']}", headers=auth_headers).status_code == 404
        assert db.query(QuizQuestion).count() == 0

    def test_delete_other_users_quiz(self, client: TestClient, other_auth_headers: dict, quiz: dict):
        response = client.delete(f"/quizzes/{quiz['quiz']['id']}", headers=other_auth_headers)

        assert response.status_code == 404
