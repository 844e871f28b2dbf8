"""Question Bank - Colecao imutavel e validada de questoes."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..errors import DuplicateQuestionError, EmptyBankError, InvalidQuestionError, QuestionBankError
from ..models.schemas import ExamQuestion

logger = logging.getLogger(__name__)

DEFAULT_BANK_PATH = Path(__file__).parent / "data" / "sample_bank.json"


class QuestionBank:
    """Banco de questoes ordenado e somente leitura, compartilhado entre tentativas.

    Validacao acontece uma vez, na construcao:
        - o banco tem ao menos uma questao
        - ids de questao sao unicos
        - todo registro e um ExamQuestion valido (gabarito parseado em set,
          referenciando opcoes existentes, cardinalidade de acordo com
          multipleAnswers)

    Example:
        >>> bank = QuestionBank.from_json_file("bank.json")
        >>> len(bank)
        80
        >>> bank.get("12").correct_answer
        frozenset({'A', 'C'})
    """

    def __init__(self, questions: Iterable[ExamQuestion]):
        self._questions: tuple[ExamQuestion, ...] = tuple(questions)
        self._validate()
        self._by_id = {q.id: q for q in self._questions}

    def _validate(self) -> None:
        if not self._questions:
            raise EmptyBankError()

        seen: set[str] = set()
        duplicates: list[str] = []
        for question in self._questions:
            if question.id in seen:
                duplicates.append(question.id)
            seen.add(question.id)
        if duplicates:
            raise DuplicateQuestionError(
                "Duplicate question ids in bank",
                details={"question_ids": sorted(set(duplicates))},
            )

    # -------------------------------------------------------------------------
    # Construtores
    # -------------------------------------------------------------------------

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> QuestionBank:
        """Cria um banco a partir de registros brutos (dicts no formato JSON do banco).

        Args:
            records: Registros de questoes, chaves camelCase ou snake_case

        Returns:
            QuestionBank validado

        Raises:
            InvalidQuestionError: Registro falhou na validacao
            EmptyBankError: Nenhum registro
            DuplicateQuestionError: Ids de questao repetidos
        """
        questions = []
        for position, record in enumerate(records):
            try:
                questions.append(ExamQuestion.model_validate(record))
            except ValidationError as e:
                record_id = record.get("id") if isinstance(record, Mapping) else None
                raise InvalidQuestionError(
                    f"Invalid question record at position {position}",
                    details={
                        "position": position,
                        "question_id": record_id,
                        "errors": [err["msg"] for err in e.errors()],
                    },
                ) from e
        return cls(questions)

    @classmethod
    def from_json_file(cls, path: str | Path) -> QuestionBank:
        """Carrega um banco de um arquivo JSON.

        O arquivo contem uma lista de registros ou um objeto com a lista
        ``questions``.
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Could not read question bank {path}: {e}")
            raise QuestionBankError(
                "Question bank file could not be read",
                details={"path": str(path), "reason": str(e)},
            ) from e

        records = data.get("questions", []) if isinstance(data, dict) else data
        if not isinstance(records, list):
            raise QuestionBankError(
                "Question bank must be a list of questions",
                details={"path": str(path)},
            )

        bank = cls.from_records(records)
        logger.info(f"Question bank loaded: {len(bank)} questions from {path.name}")
        return bank

    # -------------------------------------------------------------------------
    # Leitura
    # -------------------------------------------------------------------------

    @property
    def questions(self) -> tuple[ExamQuestion, ...]:
        return self._questions

    @property
    def question_ids(self) -> list[str]:
        return [q.id for q in self._questions]

    @property
    def multiple_answer_count(self) -> int:
        return sum(1 for q in self._questions if q.multiple_answers)

    def get(self, question_id: str) -> ExamQuestion | None:
        return self._by_id.get(str(question_id))

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[ExamQuestion]:
        return iter(self._questions)

    def __getitem__(self, index: int) -> ExamQuestion:
        return self._questions[index]

    def __repr__(self) -> str:
        return f"QuestionBank(questions={len(self._questions)})"


def load_default_bank() -> QuestionBank:
    """Carrega o banco de exemplo distribuido com o pacote."""
    return QuestionBank.from_json_file(DEFAULT_BANK_PATH)
