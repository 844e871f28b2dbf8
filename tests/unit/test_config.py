# =============================================================================
# TESTES - Config Module
# =============================================================================
# Testes unitarios da configuracao via ambiente
# =============================================================================

import os
from pathlib import Path
from unittest.mock import patch


class TestExamConfig:
    """Testes para ExamConfig.from_env."""

    def test_from_env_defaults(self):
        """Padroes sem variaveis de ambiente."""
        from config import ExamConfig
        from exam.bank import DEFAULT_BANK_PATH

        with patch.dict(os.environ, {}, clear=True):
            config = ExamConfig.from_env()

        assert config.bank_path == DEFAULT_BANK_PATH
        assert config.pass_threshold == 70.0
        assert config.log_level == "INFO"
        assert "SAP" in config.title

    def test_from_env_custom_values(self):
        """Valores vindos de variaveis de ambiente."""
        from config import ExamConfig

        env_vars = {
            "EXAM_BANK_PATH": "/tmp/bank.json",
            "EXAM_PASS_THRESHOLD": "65.5",
            "EXAM_TITLE": "Mock Exam",
            "LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env_vars, clear=True):
            config = ExamConfig.from_env()

        assert config.bank_path == Path("/tmp/bank.json")
        assert config.pass_threshold == 65.5
        assert config.title == "Mock Exam"
        assert config.log_level == "DEBUG"

    def test_invalid_threshold_falls_back(self, capture_logs):
        """Nota de corte nao numerica usa o padrao e gera warning."""
        from config import ExamConfig

        with patch.dict(os.environ, {"EXAM_PASS_THRESHOLD": "seventy"}, clear=True):
            config = ExamConfig.from_env()

        assert config.pass_threshold == 70.0
        assert "EXAM_PASS_THRESHOLD" in capture_logs.text

    def test_threshold_clamped(self):
        """Nota de corte fora do intervalo e limitada."""
        from config import ExamConfig

        with patch.dict(os.environ, {"EXAM_PASS_THRESHOLD": "150"}, clear=True):
            assert ExamConfig.from_env().pass_threshold == 100.0

        with patch.dict(os.environ, {"EXAM_PASS_THRESHOLD": "-5"}, clear=True):
            assert ExamConfig.from_env().pass_threshold == 0.0

    def test_get_config_cached(self, clean_app_state):
        """get_config retorna a mesma instancia ate cache_clear."""
        from config import get_config

        assert get_config() is get_config()

    def test_non_finite_threshold_falls_back(self, capture_logs):
        """nan/inf nao sao porcentagens: usa o padrao e gera warning."""
        from config import ExamConfig

        for raw in ("nan", "inf", "-inf"):
            with patch.dict(os.environ, {"EXAM_PASS_THRESHOLD": raw}, clear=True):
                config = ExamConfig.from_env()

            assert config.pass_threshold == 70.0
        assert "Invalid value for EXAM_PASS_THRESHOLD" in capture_logs.text
        assert "out of range" not in capture_logs.text
