"""Exam Models - Enums, Schemas e SessionState."""

from .enums import OptionFeedback, RejectionReason, SessionStatus
from .schemas import (
    AnswerFeedback,
    ExamOption,
    ExamQuestion,
    ExamSummary,
    IntentResponse,
    OptionView,
    QuestionReview,
    QuestionView,
    ScoreResult,
    SelectOptionRequest,
    SessionSnapshot,
    SubmitRequest,
    parse_answer_key,
)
from .state import SessionState

__all__ = [
    # Enums
    "SessionStatus",
    "RejectionReason",
    "OptionFeedback",
    # Bank schemas
    "ExamOption",
    "ExamQuestion",
    "parse_answer_key",
    # Scoring
    "ScoreResult",
    "ExamSummary",
    "QuestionReview",
    # Presentation
    "SelectOptionRequest",
    "SubmitRequest",
    "OptionView",
    "QuestionView",
    "AnswerFeedback",
    "SessionSnapshot",
    "IntentResponse",
    # State
    "SessionState",
]
