# =============================================================================
# CONFIGURACAO - Practice Exam
# =============================================================================

import logging
import math
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from exam.bank import DEFAULT_BANK_PATH

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "SAP S/4HANA Business Process Integration"
DEFAULT_PASS_THRESHOLD = 70.0


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Invalid value for {name}: {raw!r}, using {default}")
        return default
    # nan/inf passam no float() mas nao sao porcentagens
    if not math.isfinite(value):
        logger.warning(f"Invalid value for {name}: {raw!r}, using {default}")
        return default
    return value


@dataclass
class ExamConfig:
    """Configuracao de runtime do servidor de simulado.

    Attributes:
        bank_path: Banco de questoes JSON a carregar
        pass_threshold: Porcentagem minima de aprovacao (0-100)
        title: Titulo do simulado exibido na apresentacao
        log_level: Nivel de log raiz
    """

    bank_path: Path = DEFAULT_BANK_PATH
    pass_threshold: float = DEFAULT_PASS_THRESHOLD
    title: str = DEFAULT_TITLE
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ExamConfig":
        """Cria config a partir de variaveis de ambiente."""
        bank_path = os.getenv("EXAM_BANK_PATH")
        threshold = _env_float("EXAM_PASS_THRESHOLD", DEFAULT_PASS_THRESHOLD)
        if not 0 <= threshold <= 100:
            logger.warning(f"EXAM_PASS_THRESHOLD out of range: {threshold}, clamping to 0-100")
            threshold = min(100.0, max(0.0, threshold))

        return cls(
            bank_path=Path(bank_path) if bank_path else DEFAULT_BANK_PATH,
            pass_threshold=threshold,
            title=os.getenv("EXAM_TITLE", DEFAULT_TITLE),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_config() -> ExamConfig:
    """Config em cache (chamar get_config.cache_clear() apos mudar o ambiente)."""
    return ExamConfig.from_env()
