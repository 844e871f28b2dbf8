"""Core module - Estado compartilhado do simulado para a camada HTTP."""

from __future__ import annotations

import logging
from typing import Optional

from config import get_config
from exam.bank import QuestionBank
from exam.engine import ExamScoringEngine, ExamSession

logger = logging.getLogger(__name__)

# =============================================================================
# GLOBAL STATE
# =============================================================================

# Uma unica tentativa em processo (sem estado multi-usuario)
bank: Optional[QuestionBank] = None
session: Optional[ExamSession] = None


def load_bank() -> QuestionBank:
    """Carrega o banco configurado uma unica vez.

    Raises:
        QuestionBankError: Arquivo do banco ausente ou invalido
    """
    global bank
    if bank is None:
        config = get_config()
        bank = QuestionBank.from_json_file(config.bank_path)
    return bank


def get_session() -> ExamSession:
    """Sessao atual, criada em NOT_STARTED no primeiro uso."""
    global session
    if session is None:
        config = get_config()
        session = ExamSession(
            load_bank(),
            scoring_engine=ExamScoringEngine(pass_threshold=config.pass_threshold),
        )
        logger.info(f"Exam session created ({len(bank)} questions)")
    return session


def reset_state() -> None:
    """Descarta banco e sessao (abandona a tentativa)."""
    global bank, session
    bank = None
    session = None
