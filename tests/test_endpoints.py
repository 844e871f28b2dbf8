# =============================================================================
# TESTES DE INTEGRACAO - Endpoints
# =============================================================================
# Testes de integracao via FastAPI TestClient (sem processo de servidor)
# =============================================================================

import json
import os
from unittest.mock import patch

import pytest


def _answer_current(client, correct=True):
    """Seleciona o gabarito (ou uma opcao errada) da questao atual via API."""
    import app_state

    question = app_state.session.current_question
    if correct:
        option_ids = sorted(question.correct_answer)
    else:
        option_ids = [next(o.id for o in question.options if o.id not in question.correct_answer)]
    for option_id in option_ids:
        client.post("/exam/select", json={"option_id": option_id})


class TestHealthEndpoints:
    """Testes para endpoints de health."""

    def test_root_returns_ok(self, client):
        """GET / retorna status ok."""
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_health_after_startup(self, client):
        """Lifespan carrega o banco."""
        with client:
            response = client.get("/health")

        data = response.json()
        assert data["status"] == "healthy"
        assert data["bank_loaded"] is True
        assert data["total_questions"] >= 5
        assert data["pass_threshold"] == 70.0

    def test_health_reads_current_config(self, client):
        """Health reflete a config atual apos cache_clear."""
        import app_state
        from config import get_config

        with patch.dict(os.environ, {"EXAM_PASS_THRESHOLD": "50"}):
            get_config.cache_clear()
            with client:
                health = client.get("/health").json()
                client.post("/exam/start")
                session_threshold = app_state.session.scorer.pass_threshold

        assert health["pass_threshold"] == 50.0
        assert session_threshold == 50.0


class TestIntentEndpoints:
    """Testes para os endpoints de intents."""

    def test_state_before_start(self, client):
        response = client.get("/exam/state")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "not_started"
        assert data["question"] is None
        assert data["progress"] == 0.0

    def test_start(self, client):
        response = client.post("/exam/start")

        assert response.status_code == 200
        data = response.json()
        assert data["accepted"] is True
        assert data["state"]["status"] == "in_progress"
        assert data["state"]["index"] == 0
        assert data["state"]["question"]["options"]
        assert "correct_answer" not in data["state"]["question"]

    def test_start_twice(self, client):
        client.post("/exam/start")

        data = client.post("/exam/start").json()

        assert data["accepted"] is False
        assert data["reason"] == "already_started"

    def test_submit_without_selection_is_rejected_not_error(self, client):
        """Erros de sequencia retornam 200 com accepted=false."""
        client.post("/exam/start")

        response = client.post("/exam/submit")

        assert response.status_code == 200
        assert response.json()["accepted"] is False
        assert response.json()["reason"] == "empty_selection"

    def test_select_submit_next(self, client):
        client.post("/exam/start")
        _answer_current(client)

        submitted = client.post("/exam/submit", json={}).json()
        assert submitted["accepted"] is True
        assert submitted["state"]["revealed"] is True
        assert submitted["state"]["feedback"]["is_correct"] is True
        assert submitted["state"]["feedback"]["headline"] == "Well done!"

        moved = client.post("/exam/next").json()
        assert moved["accepted"] is True
        assert moved["state"]["index"] == 1
        assert moved["state"]["revealed"] is False

    def test_select_unknown_option(self, client):
        client.post("/exam/start")

        data = client.post("/exam/select", json={"option_id": "ZZ"}).json()

        assert data["accepted"] is False
        assert data["reason"] == "unknown_option"

    def test_select_validation_error(self, client):
        """Indice negativo falha na validacao do request."""
        client.post("/exam/start")

        response = client.post("/exam/select", json={"option_id": "A", "question_index": -1})

        assert response.status_code == 422

    def test_previous(self, client):
        client.post("/exam/start")

        assert client.post("/exam/previous").json()["reason"] == "first_question"

        _answer_current(client)
        client.post("/exam/submit")
        client.post("/exam/next")
        data = client.post("/exam/previous").json()

        assert data["accepted"] is True
        assert data["state"]["index"] == 0
        assert data["state"]["revealed"] is False
        assert data["state"]["selection"]

    def test_reset_and_reshuffle(self, client):
        client.post("/exam/start")
        _answer_current(client)

        for path in ("/exam/reset", "/exam/reshuffle"):
            data = client.post(path).json()
            assert data["accepted"] is True
            assert data["state"]["index"] == 0
            assert data["state"]["selection"] == []

        assert client.get("/exam/state").json()["attempt"] == 3


class TestResultsEndpoint:
    """Testes para a tela de resultados."""

    def test_results_before_completion(self, client):
        client.post("/exam/start")

        response = client.get("/exam/results")

        assert response.status_code == 409

    def test_full_run(self, client):
        """Responde todas as questoes corretamente e le o resultado."""
        total = client.post("/exam/start").json()["state"]["total_questions"]

        for _ in range(total):
            _answer_current(client)
            client.post("/exam/submit")
            client.post("/exam/next")

        assert client.get("/exam/state").json()["status"] == "completed"
        data = client.get("/exam/results").json()
        assert data["correct"] == total
        assert data["percentage"] == 100
        assert data["passed"] is True
        assert len(data["review"]) == total

    def test_full_run_failing(self, client):
        total = client.post("/exam/start").json()["state"]["total_questions"]

        for _ in range(total):
            _answer_current(client, correct=False)
            client.post("/exam/submit")
            client.post("/exam/next")

        data = client.get("/exam/results").json()
        assert data["correct"] == 0
        assert data["incorrect"] == total
        assert data["passed"] is False
        assert data["title"] == "Keep practicing!"


class TestInvalidBank:
    """Testes para erros de configuracao via HTTP."""

    @pytest.fixture
    def bad_bank_client(self, tmp_path, clean_app_state):
        from fastapi.testclient import TestClient
        from server import app

        path = tmp_path / "bank.json"
        path.write_text(
            json.dumps(
                [
                    {
                        "id": 1,
                        "question": "?",
                        "options": [{"id": "A", "text": "a"}],
                        "correctAnswer": "B",
                    }
                ]
            ),
            encoding="utf-8",
        )
        with patch.dict(os.environ, {"EXAM_BANK_PATH": str(path)}):
            yield TestClient(app)

    def test_start_rejected(self, bad_bank_client):
        response = bad_bank_client.post("/exam/start")

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "InvalidQuestionError"
