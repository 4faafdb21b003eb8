"""Tests for the /api/study endpoint."""

import pytest


@pytest.fixture
def study_client(client, user_token):
    client.cookies.set("session_token", user_token)
    return client


class TestStudyRoutes:
    def test_requires_session(self, client):
        response = client.post("/api/study", json={"action": "review", "cardId": "c1", "quality": 4})
        assert response.status_code == 401

    def test_review(self, study_client):
        response = study_client.post(
            "/api/study",
            json={
                "action": "review",
                "sessionId": "sess-1",
                "cardId": "card_2",
                "quality": 4,
                "responseTime": 2000,
                "card": {"easinessFactor": 2.5, "repetition": 2, "interval": 6},
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["cardId"] == "card_2"
        assert body["sm2Result"]["interval"] == 15
        assert body["sm2Result"]["repetition"] == 3
        assert body["sm2Result"]["easinessFactor"] == 2.5
        assert body["session"]["cardsCorrect"] == 1
        assert body["feedback"] == "Excelente! Próxima revisão em 15 dias."

    def test_review_without_card_state_treats_card_as_new(self, study_client):
        response = study_client.post("/api/study", json={"action": "review", "cardId": "c1", "quality": 0})

        assert response.status_code == 200
        assert response.json()["sm2Result"]["interval"] == 1
        assert response.json()["sm2Result"]["repetition"] == 0

    def test_missing_quality_is_400(self, study_client):
        response = study_client.post("/api/study", json={"action": "review", "cardId": "c1"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Card ID and quality are required for review"

    def test_unknown_action_is_400(self, study_client):
        response = study_client.post("/api/study", json={"action": "dance"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid action"
