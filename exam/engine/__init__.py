"""Exam Engines - Embaralhamento, pontuacao e maquina de estados da sessao."""

from .scoring_engine import ExamScoringEngine
from .session import ExamSession, IntentResult
from .shuffle_engine import QuestionShuffleEngine

__all__ = ["QuestionShuffleEngine", "ExamScoringEngine", "ExamSession", "IntentResult"]
