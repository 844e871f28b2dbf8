"""Exam Module - Motor de sessao de simulado.

Estrutura:
- models/: Enums, schemas Pydantic, SessionState
- bank/: QuestionBank (carga + validacao) e o banco de exemplo
- engine/: QuestionShuffleEngine, ExamScoringEngine, ExamSession
- errors.py: Erros de configuracao do banco de questoes
- router.py: Endpoints FastAPI
"""

from .bank import QuestionBank, load_default_bank
from .engine import ExamScoringEngine, ExamSession, IntentResult, QuestionShuffleEngine
from .errors import (
    DuplicateQuestionError,
    EmptyBankError,
    ExamError,
    InvalidQuestionError,
    QuestionBankError,
)
from .models import (
    ExamOption,
    ExamQuestion,
    OptionFeedback,
    RejectionReason,
    ScoreResult,
    SessionState,
    SessionStatus,
)

__all__ = [
    # Models
    "ExamOption",
    "ExamQuestion",
    "ScoreResult",
    "SessionState",
    "SessionStatus",
    "RejectionReason",
    "OptionFeedback",
    # Bank
    "QuestionBank",
    "load_default_bank",
    # Engines
    "QuestionShuffleEngine",
    "ExamScoringEngine",
    "ExamSession",
    "IntentResult",
    # Errors
    "ExamError",
    "QuestionBankError",
    "EmptyBankError",
    "DuplicateQuestionError",
    "InvalidQuestionError",
]
