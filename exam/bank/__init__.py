"""Exam Bank - Carga e validacao do banco de questoes."""

from .question_bank import DEFAULT_BANK_PATH, QuestionBank, load_default_bank

__all__ = ["DEFAULT_BANK_PATH", "QuestionBank", "load_default_bank"]
