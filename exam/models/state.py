"""Exam State - Estado mutavel de uma tentativa."""

from dataclasses import dataclass, field
from typing import Any

from .enums import SessionStatus
from .schemas import ExamQuestion


@dataclass
class SessionState:
    """Estado completo de uma tentativa de simulado.

    Attributes:
        status: Status do ciclo de vida
        working_set: Copia embaralhada do banco de questoes
        selections: Indice no working set -> ids de opcoes selecionadas
        index: Questao atual (base 0)
        revealed: Se o feedback da questao atual esta visivel
        attempt: Quantidade de working sets gerados nesta sessao
    """

    status: SessionStatus = SessionStatus.NOT_STARTED
    working_set: tuple[ExamQuestion, ...] = ()
    selections: dict[int, set[str]] = field(default_factory=dict)
    index: int = 0
    revealed: bool = False
    attempt: int = 0

    @property
    def total(self) -> int:
        return len(self.working_set)

    @property
    def last_index(self) -> int:
        return len(self.working_set) - 1

    def has_index(self, index: int) -> bool:
        return 0 <= index < len(self.working_set)

    def selection_for(self, index: int) -> frozenset[str]:
        """Ids selecionados de uma questao (vazio se nunca respondida)."""
        return frozenset(self.selections.get(index, ()))

    def restart(self, working_set: tuple[ExamQuestion, ...]) -> None:
        """Substitui a tentativa inteira por um working set novo."""
        self.status = SessionStatus.IN_PROGRESS
        self.working_set = working_set
        self.selections = {}
        self.index = 0
        self.revealed = False
        self.attempt += 1

    def to_dict(self) -> dict[str, Any]:
        """Visao serializavel em JSON, usada em logs."""
        return {
            "status": self.status.value,
            "question_ids": [q.id for q in self.working_set],
            "selections": {str(k): sorted(v) for k, v in self.selections.items()},
            "index": self.index,
            "revealed": self.revealed,
            "attempt": self.attempt,
        }
