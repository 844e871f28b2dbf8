"""Exam Enums - Status da sessao, rejeicoes de intents e feedback de opcoes."""

from enum import Enum


class SessionStatus(str, Enum):
    """Ciclo de vida de uma tentativa."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"  # terminal ate reset()


class RejectionReason(str, Enum):
    """Motivo pelo qual a sessao ignorou um intent."""

    NOT_STARTED = "not_started"
    COMPLETED = "completed"
    ALREADY_STARTED = "already_started"
    FEEDBACK_REVEALED = "feedback_revealed"
    UNKNOWN_OPTION = "unknown_option"
    INVALID_QUESTION_INDEX = "invalid_question_index"
    EMPTY_SELECTION = "empty_selection"
    NOT_SUBMITTED = "not_submitted"
    FIRST_QUESTION = "first_question"


class OptionFeedback(str, Enum):
    """Como uma opcao e exibida apos o feedback ser revelado."""

    CORRECT_SELECTED = "correct_selected"  # selecionada e no gabarito
    WRONG_SELECTED = "wrong_selected"  # selecionada, fora do gabarito
    MISSED = "missed"  # no gabarito, nao selecionada
    NEUTRAL = "neutral"
