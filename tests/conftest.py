# =============================================================================
# CONFTEST - Fixtures compartilhadas por todos os testes
# =============================================================================
# Bancos de exemplo, aleatoriedade com seed e client FastAPI
# =============================================================================

import os
import random
from unittest.mock import patch

import pytest


# =============================================================================
# FIXTURES DE AMBIENTE
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Configura ambiente para todos os testes."""
    env_vars = {
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "ERROR",
    }
    with patch.dict(os.environ, env_vars):
        yield


@pytest.fixture
def clean_app_state():
    """Descarta banco/sessao em processo e a config em cache."""
    import app_state
    from config import get_config

    app_state.reset_state()
    get_config.cache_clear()
    yield
    app_state.reset_state()
    get_config.cache_clear()


# =============================================================================
# FIXTURES DE DADOS
# =============================================================================


@pytest.fixture
def two_question_records():
    """Duas questoes de resposta unica, gabaritos "A" e "B"."""
    return [
        {
            "id": 1,
            "question": "Which option is A?",
            "multipleAnswers": False,
            "options": [{"id": "A", "text": "Alpha"}, {"id": "B", "text": "Beta"}],
            "correctAnswer": "A",
        },
        {
            "id": 2,
            "question": "Which option is B?",
            "multipleAnswers": False,
            "options": [{"id": "A", "text": "Alpha"}, {"id": "B", "text": "Beta"}],
            "correctAnswer": "B",
        },
    ]


@pytest.fixture
def multiple_answer_record():
    """Questao de multipla resposta com gabarito "A,C"."""
    return {
        "id": "M1",
        "question": "Which options are vowels?",
        "note": "There are 2 correct answers to this question.",
        "multipleAnswers": True,
        "options": [
            {"id": "A", "text": "A"},
            {"id": "B", "text": "B"},
            {"id": "C", "text": "E"},
            {"id": "D", "text": "D"},
        ],
        "correctAnswer": "A,C",
    }


@pytest.fixture
def sample_records(two_question_records, multiple_answer_record):
    """Banco misto: duas questoes de resposta unica e uma de multipla."""
    return [*two_question_records, multiple_answer_record]


@pytest.fixture
def sample_bank(sample_records):
    """QuestionBank validado a partir de sample_records."""
    from exam.bank import QuestionBank

    return QuestionBank.from_records(sample_records)


@pytest.fixture
def seeded_rng():
    """Gerador deterministico para asserts de embaralhamento."""
    return random.Random(1234)


@pytest.fixture
def make_session():
    """Factory de sessoes a partir de uma lista de registros."""
    from exam.bank import QuestionBank
    from exam.engine import ExamSession

    def _make_session(records, start=True):
        session = ExamSession(QuestionBank.from_records(records))
        if start:
            session.start()
        return session

    return _make_session


@pytest.fixture
def capture_logs(caplog):
    """Captura logs durante testes."""
    import logging

    caplog.set_level(logging.DEBUG)
    return caplog


# =============================================================================
# FIXTURES FASTAPI
# =============================================================================


@pytest.fixture
def client(clean_app_state):
    """Client de teste FastAPI sobre uma sessao nova."""
    from fastapi.testclient import TestClient
    from server import app

    return TestClient(app)
