"""Exam Session - Maquina de estados de uma tentativa de simulado."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ..bank.question_bank import QuestionBank
from ..models.enums import OptionFeedback, RejectionReason, SessionStatus
from ..models.schemas import (
    AnswerFeedback,
    ExamQuestion,
    ExamSummary,
    OptionView,
    QuestionView,
    ScoreResult,
    SessionSnapshot,
)
from ..models.state import SessionState
from .scoring_engine import ExamScoringEngine
from .shuffle_engine import QuestionShuffleEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntentResult:
    """Resultado de um intent do usuario.

    Intents rejeitados nao alteram o estado; ``reason`` diz o motivo.
    """

    accepted: bool
    reason: RejectionReason | None = None

    @classmethod
    def ok(cls) -> IntentResult:
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: RejectionReason) -> IntentResult:
        return cls(accepted=False, reason=reason)

    def __bool__(self) -> bool:
        return self.accepted


class ExamSession:
    """Maquina de estados da tentativa.

    States:
        NOT_STARTED -> IN_PROGRESS(index, revealed) -> COMPLETED

    Intents (select_option, submit, next, previous) nunca levantam excecao
    por sequencia invalida: retornam um IntentResult rejeitado e mantem o
    estado. Erros de configuracao do banco (vazio, ids duplicados, gabarito
    invalido) sao levantados por start()/reset() como QuestionBankError e a
    sessao nao inicia.

    Example:
        >>> session = ExamSession(bank)
        >>> session.start()
        >>> session.select_option("A")
        >>> session.submit()
        >>> session.next()
    """

    def __init__(
        self,
        bank: QuestionBank | Iterable[ExamQuestion | Mapping[str, Any]],
        shuffle_engine: QuestionShuffleEngine | None = None,
        scoring_engine: ExamScoringEngine | None = None,
    ):
        """Inicializa sessao (NOT_STARTED).

        Args:
            bank: Banco de questoes; registros brutos sao validados no start()
            shuffle_engine: Engine que monta os working sets
            scoring_engine: Engine usada no feedback e na nota final
        """
        self._source = bank if isinstance(bank, QuestionBank) else list(bank)
        self._bank: QuestionBank | None = bank if isinstance(bank, QuestionBank) else None
        self.shuffler = shuffle_engine or QuestionShuffleEngine()
        self.scorer = scoring_engine or ExamScoringEngine()
        self._state = SessionState()

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def _ensure_bank(self) -> QuestionBank:
        if self._bank is None:
            items = self._source
            if all(isinstance(item, ExamQuestion) for item in items):
                self._bank = QuestionBank(items)
            else:
                self._bank = QuestionBank.from_records(
                    item.model_dump(by_alias=True) if isinstance(item, ExamQuestion) else item
                    for item in items
                )
        return self._bank

    def _new_attempt(self) -> None:
        # Embaralha antes de mexer no estado: banco invalido deixa o estado intacto
        working_set = self.shuffler.shuffle(self._ensure_bank())
        self._state.restart(working_set)

    def start(self) -> IntentResult:
        """NOT_STARTED -> IN_PROGRESS(0, revealed=False).

        Raises:
            QuestionBankError: O banco e invalido
        """
        if self._state.status != SessionStatus.NOT_STARTED:
            return self._reject("start", RejectionReason.ALREADY_STARTED)

        self._new_attempt()
        logger.info(f"Exam started: {self._state.total} questions (attempt {self._state.attempt})")
        return IntentResult.ok()

    def reset(self) -> IntentResult:
        """Nova tentativa a partir de qualquer estado: novo embaralhamento, selecoes limpas."""
        self._new_attempt()
        logger.info(f"Exam restarted (attempt {self._state.attempt})")
        return IntentResult.ok()

    def reshuffle(self) -> IntentResult:
        """Alias de reset(); reembaralhar sempre descarta as selecoes anteriores."""
        return self.reset()

    # =========================================================================
    # INTENTS
    # =========================================================================

    def _reject(self, intent: str, reason: RejectionReason) -> IntentResult:
        logger.debug(f"Intent '{intent}' ignored: {reason.value}")
        return IntentResult.reject(reason)

    def _check_in_progress(self, intent: str) -> IntentResult | None:
        if self._state.status == SessionStatus.NOT_STARTED:
            return self._reject(intent, RejectionReason.NOT_STARTED)
        if self._state.status == SessionStatus.COMPLETED:
            return self._reject(intent, RejectionReason.COMPLETED)
        return None

    def select_option(self, option_id: str, question_index: int | None = None) -> IntentResult:
        """Seleciona (resposta unica) ou alterna (multipla resposta) uma opcao.

        Args:
            option_id: Id da opcao dentro da questao
            question_index: Indice no working set, padrao e a questao atual

        Returns:
            Rejeitado enquanto o feedback daquela questao esta revelado
        """
        rejected = self._check_in_progress("select_option")
        if rejected is not None:
            return rejected

        state = self._state
        index = state.index if question_index is None else question_index
        if not state.has_index(index):
            return self._reject("select_option", RejectionReason.INVALID_QUESTION_INDEX)
        if index == state.index and state.revealed:
            return self._reject("select_option", RejectionReason.FEEDBACK_REVEALED)

        question = state.working_set[index]
        if question.get_option(option_id) is None:
            return self._reject("select_option", RejectionReason.UNKNOWN_OPTION)

        if question.multiple_answers:
            selection = state.selections.setdefault(index, set())
            if option_id in selection:
                selection.discard(option_id)
            else:
                selection.add(option_id)
        else:
            state.selections[index] = {option_id}

        logger.debug(f"Question {question.id}: selection {sorted(state.selections[index])}")
        return IntentResult.ok()

    def submit(self, question_index: int | None = None) -> IntentResult:
        """Revela o feedback da questao atual.

        Somente a questao atual pode ser submetida, e apenas com selecao
        nao vazia.
        """
        rejected = self._check_in_progress("submit")
        if rejected is not None:
            return rejected

        state = self._state
        if question_index is not None and question_index != state.index:
            return self._reject("submit", RejectionReason.INVALID_QUESTION_INDEX)
        if state.revealed:
            return self._reject("submit", RejectionReason.FEEDBACK_REVEALED)
        if not state.selection_for(state.index):
            return self._reject("submit", RejectionReason.EMPTY_SELECTION)

        state.revealed = True
        question = state.working_set[state.index]
        is_correct = self.scorer.is_correct(question, state.selection_for(state.index))
        logger.info(
            f"Question {question.id} submitted ({state.index + 1}/{state.total}): "
            f"{'correct' if is_correct else 'incorrect'}"
        )
        return IntentResult.ok()

    def next(self) -> IntentResult:
        """Avanca apos o feedback; na ultima questao, conclui o simulado."""
        rejected = self._check_in_progress("next")
        if rejected is not None:
            return rejected

        state = self._state
        if not state.revealed:
            return self._reject("next", RejectionReason.NOT_SUBMITTED)

        state.revealed = False
        if state.index < state.last_index:
            state.index += 1
            return IntentResult.ok()

        state.status = SessionStatus.COMPLETED
        result = self.score()
        logger.info(f"Exam completed: {result.correct}/{result.total} correct")
        return IntentResult.ok()

    def previous(self) -> IntentResult:
        """Volta uma questao.

        O feedback da questao anterior volta a ficar oculto; a selecao e
        mantida e ela pode ser respondida e submetida de novo.
        """
        rejected = self._check_in_progress("previous")
        if rejected is not None:
            return rejected

        state = self._state
        if state.index == 0:
            return self._reject("previous", RejectionReason.FIRST_QUESTION)

        state.index -= 1
        state.revealed = False
        return IntentResult.ok()

    # =========================================================================
    # LEITURA
    # =========================================================================

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def status(self) -> SessionStatus:
        return self._state.status

    @property
    def working_set(self) -> tuple[ExamQuestion, ...]:
        return self._state.working_set

    @property
    def current_index(self) -> int:
        return self._state.index

    @property
    def total_questions(self) -> int:
        return self._state.total

    @property
    def revealed(self) -> bool:
        return self._state.revealed

    @property
    def current_question(self) -> ExamQuestion | None:
        if self._state.status != SessionStatus.IN_PROGRESS:
            return None
        return self._state.working_set[self._state.index]

    @property
    def current_selection(self) -> frozenset[str]:
        return self._state.selection_for(self._state.index)

    def selection_for(self, question_index: int) -> frozenset[str]:
        return self._state.selection_for(question_index)

    def is_selected(self, option_id: str) -> bool:
        return option_id in self.current_selection

    @property
    def can_submit(self) -> bool:
        return (
            self._state.status == SessionStatus.IN_PROGRESS
            and not self._state.revealed
            and bool(self.current_selection)
        )

    @property
    def progress(self) -> float:
        """Fracao exibida na barra de progresso: (index + 1) / total."""
        if self._state.status == SessionStatus.NOT_STARTED or not self._state.total:
            return 0.0
        if self._state.status == SessionStatus.COMPLETED:
            return 1.0
        return (self._state.index + 1) / self._state.total

    def option_feedback(self) -> dict[str, OptionFeedback]:
        """Classe de feedback por opcao da questao atual (vazio ate revelar)."""
        question = self.current_question
        if question is None or not self._state.revealed:
            return {}
        selection = self.current_selection
        return {
            option.id: self.scorer.classify_option(question, option.id, selection)
            for option in question.options
        }

    def current_result(self) -> AnswerFeedback | None:
        """Feedback certo/errado da questao atual apos revelar."""
        question = self.current_question
        if question is None or not self._state.revealed:
            return None
        return AnswerFeedback(**self.scorer.evaluate_answer(question, self.current_selection))

    def score(self) -> ScoreResult:
        return self.scorer.score(self._state.working_set, self._state.selections)

    def summary(self) -> ExamSummary:
        """Nota final com veredito e revisao por questao."""
        return self.scorer.summarize(self._state.working_set, self._state.selections)

    def snapshot(self) -> SessionSnapshot:
        """Visao da sessao pronta para apresentacao (gabarito oculto ate revelar)."""
        question = self.current_question
        question_view = None
        if question is not None:
            feedback = self.option_feedback()
            selection = self.current_selection
            question_view = QuestionView(
                id=question.id,
                question=question.question,
                note=question.note,
                multiple_answers=question.multiple_answers,
                options=[
                    OptionView(
                        id=option.id,
                        text=option.text,
                        selected=option.id in selection,
                        feedback=feedback.get(option.id),
                    )
                    for option in question.options
                ],
            )

        return SessionSnapshot(
            status=self._state.status,
            attempt=self._state.attempt,
            index=self._state.index,
            total_questions=self._state.total,
            progress=self.progress,
            revealed=self._state.revealed,
            can_submit=self.can_submit,
            selection=sorted(self.current_selection) if question is not None else [],
            question=question_view,
            feedback=self.current_result(),
        )
