"""Shuffle Engine - Ordem aleatoria de questoes e opcoes."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Sequence
from typing import TypeVar

from ..errors import EmptyBankError
from ..models.schemas import ExamQuestion

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QuestionShuffleEngine:
    """Monta o working set de uma tentativa.

    As questoes sao permutadas uma vez e as opcoes de cada questao sao
    permutadas de forma independente, com Fisher-Yates in-place sobre copias.
    O banco de origem nunca e alterado: toda chamada parte da mesma entrada
    e sorteia valores novos do gerador.

    Example:
        >>> engine = QuestionShuffleEngine()
        >>> working_set = engine.shuffle(bank)
        >>> sorted(q.id for q in working_set) == sorted(bank.question_ids)
        True
    """

    def __init__(self, rng: random.Random | None = None):
        """Inicializa engine.

        Args:
            rng: Gerador aleatorio (testes passam um random.Random com seed)
        """
        self.rng = rng or random.Random()

    def shuffle_items(self, items: Sequence[T]) -> list[T]:
        """Retorna uma copia de ``items`` embaralhada uniformemente."""
        shuffled = list(items)
        for i in range(len(shuffled) - 1, 0, -1):
            j = self.rng.randint(0, i)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled

    def shuffle_options(self, question: ExamQuestion) -> ExamQuestion:
        """Copia da questao com as opcoes em nova ordem.

        Ids de opcoes e gabarito nao mudam, apenas a ordem.
        """
        return question.model_copy(update={"options": tuple(self.shuffle_items(question.options))})

    def shuffle(self, bank: Iterable[ExamQuestion]) -> tuple[ExamQuestion, ...]:
        """Gera um working set a partir do banco.

        Args:
            bank: QuestionBank ou qualquer iteravel de questoes

        Returns:
            Nova tupla de questoes (embaralhada), cada uma com opcoes embaralhadas

        Raises:
            EmptyBankError: O banco nao tem questoes
        """
        questions = list(bank)
        if not questions:
            raise EmptyBankError()

        working_set = tuple(self.shuffle_options(q) for q in self.shuffle_items(questions))
        logger.debug(f"Working set generated: {[q.id for q in working_set]}")
        return working_set
