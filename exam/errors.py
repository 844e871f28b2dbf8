"""Exam Errors - Erros de configuracao levantados ao carregar um banco de questoes."""

from __future__ import annotations

from typing import Any


class ExamError(Exception):
    """Erro base do pacote exam.

    Attributes:
        message: Descricao legivel
        details: Contexto extra (ids de questao, indice do registro, ...)
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class QuestionBankError(ExamError):
    """Banco de questoes malformado. A sessao nao deve iniciar."""


class EmptyBankError(QuestionBankError):
    """O banco nao tem questoes."""

    def __init__(self, message: str = "Question bank is empty", details: dict[str, Any] | None = None):
        super().__init__(message, details)


class DuplicateQuestionError(QuestionBankError):
    """Duas questoes com o mesmo identificador."""


class InvalidQuestionError(QuestionBankError):
    """Registro de questao falhou na validacao (opcoes, gabarito, ...)."""
