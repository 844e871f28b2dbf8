"""
Practice Exam Server

Servidor FastAPI para uma tentativa de simulado:
- Ordem de questoes e opcoes embaralhada a cada tentativa
- Questoes de resposta unica e multipla
- Feedback liberado apos submit, nota final com revisao
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import app_state
from config import get_config
from exam.errors import QuestionBankError
from exam.router import router as exam_router

logging.basicConfig(
    level=getattr(logging, get_config().log_level, logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("exam.server")


# =============================================================================
# FASTAPI APP
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Carrega o banco de questoes no startup; descarta a tentativa no shutdown."""
    config = get_config()
    try:
        bank = app_state.load_bank()
        logger.info(f"Starting practice exam: {config.title} ({len(bank)} questions)")
    except QuestionBankError as e:
        # Servidor continua no ar; endpoints /exam respondem 400 ate o banco ser corrigido
        logger.error(f"Question bank not loaded: {e.message} {e.details}")
    yield
    app_state.reset_state()
    logger.info("Practice exam stopped")


app = FastAPI(
    title="Practice Exam",
    description="Randomized practice exam with feedback and scoring",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(exam_router)


# =============================================================================
# HEALTH ENDPOINTS
# =============================================================================

@app.get("/")
async def root():
    """Health check."""
    session = app_state.session
    return {
        "status": "ok",
        "title": get_config().title,
        "session_status": session.status.value if session else None,
    }


@app.get("/health")
async def health_check():
    """Status do banco e constantes de aprovacao."""
    bank = app_state.bank
    return {
        "status": "healthy" if bank is not None else "degraded",
        "bank_loaded": bank is not None,
        "total_questions": len(bank) if bank is not None else 0,
        "multiple_answer_questions": bank.multiple_answer_count if bank is not None else 0,
        "pass_threshold": get_config().pass_threshold,
    }


# =============================================================================
# MAIN
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
