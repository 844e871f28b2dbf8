"""Exam Router - Endpoints FastAPI que repassam os intents do usuario para a sessao."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

import app_state

from .engine.session import ExamSession, IntentResult
from .errors import QuestionBankError
from .models.enums import SessionStatus
from .models.schemas import (
    ExamSummary,
    IntentResponse,
    SelectOptionRequest,
    SessionSnapshot,
    SubmitRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/exam", tags=["Exam"])


# =============================================================================
# INJECAO DE DEPENDENCIA
# =============================================================================


async def get_exam_session() -> ExamSession:
    """Dependency que retorna a sessao em processo."""
    try:
        return app_state.get_session()
    except QuestionBankError as e:
        logger.error(f"Exam unavailable: {e.message}")
        raise HTTPException(status_code=400, detail=e.to_dict()) from e


def _respond(session: ExamSession, result: IntentResult) -> IntentResponse:
    return IntentResponse(
        accepted=result.accepted,
        reason=result.reason,
        state=session.snapshot(),
    )


# =============================================================================
# INTENT ENDPOINTS
# =============================================================================


@router.post("/start", response_model=IntentResponse)
async def start_exam(session: ExamSession = Depends(get_exam_session)):
    """Inicia o simulado: embaralha questoes e opcoes, indice 0.

    Banco que falha na validacao rejeita o inicio com HTTP 400.
    """
    try:
        result = session.start()
    except QuestionBankError as e:
        logger.error(f"Exam cannot start: {e.message}")
        raise HTTPException(status_code=400, detail=e.to_dict()) from e
    return _respond(session, result)


@router.get("/state", response_model=SessionSnapshot)
async def get_state(session: ExamSession = Depends(get_exam_session)):
    """Questao atual, selecao, flag de feedback e progresso."""
    return session.snapshot()


@router.post("/select", response_model=IntentResponse)
async def select_option(
    request: SelectOptionRequest,
    session: ExamSession = Depends(get_exam_session),
):
    """Seleciona (resposta unica) ou alterna (multipla resposta) uma opcao."""
    result = session.select_option(request.option_id, request.question_index)
    return _respond(session, result)


@router.post("/submit", response_model=IntentResponse)
async def submit_answer(
    request: SubmitRequest | None = None,
    session: ExamSession = Depends(get_exam_session),
):
    """Revela o feedback da questao atual."""
    question_index = request.question_index if request else None
    return _respond(session, session.submit(question_index))


@router.post("/next", response_model=IntentResponse)
async def next_question(session: ExamSession = Depends(get_exam_session)):
    """Proxima questao, ou conclui o simulado a partir da ultima."""
    return _respond(session, session.next())


@router.post("/previous", response_model=IntentResponse)
async def previous_question(session: ExamSession = Depends(get_exam_session)):
    """Questao anterior (feedback oculto, selecao mantida)."""
    return _respond(session, session.previous())


@router.post("/reset", response_model=IntentResponse)
async def reset_exam(session: ExamSession = Depends(get_exam_session)):
    """Refaz o simulado com novo embaralhamento; todas as selecoes sao descartadas."""
    return _respond(session, session.reset())


@router.post("/reshuffle", response_model=IntentResponse)
async def reshuffle_exam(session: ExamSession = Depends(get_exam_session)):
    """Igual ao reset: nova ordem, selecoes descartadas."""
    return _respond(session, session.reshuffle())


# =============================================================================
# RESULTADOS
# =============================================================================


@router.get("/results", response_model=ExamSummary)
async def get_results(session: ExamSession = Depends(get_exam_session)):
    """Nota final, veredito e revisao por questao.

    Disponivel apenas depois que a ultima questao foi submetida e confirmada.
    """
    if session.status != SessionStatus.COMPLETED:
        raise HTTPException(
            status_code=409,
            detail=f"Exam not completed (status: {session.status.value})",
        )
    return session.summary()
