"""Exam Schemas - Modelos Pydantic do banco de questoes e da camada de apresentacao."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import OptionFeedback, RejectionReason, SessionStatus


def parse_answer_key(value) -> list[str]:
    """Faz parse de um gabarito.

    O banco guarda gabaritos como ids separados por virgula ("A, C"); listas
    sao aceitas como estao. Espacos sao removidos e partes vazias descartadas.
    """
    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        parts = list(value)
    else:
        parts = [value]
    return [str(part).strip() for part in parts if str(part).strip()]


class ExamOption(BaseModel):
    """Opcao de resposta de uma questao."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Id da opcao, estavel entre embaralhamentos (A, B, C...)")
    text: str = Field(..., description="Texto da opcao")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return str(value).strip() if value is not None else value


class ExamQuestion(BaseModel):
    """Registro de questao do banco com o gabarito ja parseado."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1, description="Id da questao, unico no banco")
    question: str = Field(..., description="Enunciado")
    note: str | None = Field(default=None, description="Nota opcional de esclarecimento")
    multiple_answers: bool = Field(
        default=False,
        alias="multipleAnswers",
        description="Se mais de uma opcao pode estar correta",
    )
    options: tuple[ExamOption, ...] = Field(..., min_length=1, description="Opcoes na ordem do banco")
    correct_answer: frozenset[str] = Field(
        ...,
        alias="correctAnswer",
        description="Ids de opcoes que formam a resposta correta",
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return str(value).strip() if value is not None else value

    @field_validator("correct_answer", mode="before")
    @classmethod
    def _parse_key(cls, value):
        if value is None:
            return value
        return frozenset(parse_answer_key(value))

    @model_validator(mode="after")
    def _check_key(self) -> "ExamQuestion":
        ids = [option.id for option in self.options]
        if len(set(ids)) != len(ids):
            raise ValueError(f"duplicate option ids in question {self.id}: {ids}")
        if not self.correct_answer:
            raise ValueError(f"question {self.id} has an empty answer key")
        unknown = sorted(self.correct_answer - set(ids))
        if unknown:
            raise ValueError(f"answer key of question {self.id} references unknown options: {unknown}")
        if not self.multiple_answers and len(self.correct_answer) != 1:
            raise ValueError(
                f"single-answer question {self.id} has {len(self.correct_answer)} keys"
            )
        return self

    @property
    def option_ids(self) -> tuple[str, ...]:
        return tuple(option.id for option in self.options)

    def get_option(self, option_id: str) -> ExamOption | None:
        for option in self.options:
            if option.id == option_id:
                return option
        return None

    def is_key_option(self, option_id: str) -> bool:
        return option_id in self.correct_answer

    @property
    def correct_answer_label(self) -> str:
        # Ordenado: mesmo rotulo em qualquer ordem de opcoes
        return ", ".join(sorted(self.correct_answer))


class ScoreResult(BaseModel):
    """Contagem bruta de um working set."""

    correct: int = Field(..., ge=0)
    total: int = Field(..., ge=0)

    @property
    def incorrect(self) -> int:
        return self.total - self.correct


# =============================================================================
# MODELOS DE APRESENTACAO
# =============================================================================


class SelectOptionRequest(BaseModel):
    """Request para selecionar ou alternar uma opcao."""

    option_id: str = Field(..., description="Id da opcao a selecionar/alternar")
    question_index: int | None = Field(
        default=None, ge=0, description="Indice no working set (padrao: questao atual)"
    )


class SubmitRequest(BaseModel):
    """Request para submeter a resposta de uma questao."""

    question_index: int | None = Field(default=None, ge=0)


class OptionView(BaseModel):
    """Opcao como exibida na questao atual."""

    id: str
    text: str
    selected: bool = False
    feedback: OptionFeedback | None = Field(
        default=None, description="Preenchido apenas apos revelar o feedback"
    )


class QuestionView(BaseModel):
    """Questao atual sem o gabarito."""

    id: str
    question: str
    note: str | None = None
    multiple_answers: bool
    options: list[OptionView]


class AnswerFeedback(BaseModel):
    """Feedback exibido apos submeter uma questao."""

    is_correct: bool
    headline: str = Field(..., description="'Well done!' or 'Learn from this:'")
    message: str
    correct_answer: list[str] = Field(..., description="Ids do gabarito, ordenados")


class SessionSnapshot(BaseModel):
    """Modelo de leitura da sessao para a camada de apresentacao."""

    status: SessionStatus
    attempt: int = Field(..., description="Quantidade de embaralhamentos gerados ate agora")
    index: int
    total_questions: int
    progress: float = Field(..., ge=0.0, le=1.0)
    revealed: bool
    can_submit: bool
    selection: list[str] = Field(default_factory=list)
    question: QuestionView | None = None
    feedback: AnswerFeedback | None = None


class IntentResponse(BaseModel):
    """Resultado de um intent mais o estado resultante."""

    accepted: bool
    reason: RejectionReason | None = None
    state: SessionSnapshot


class QuestionReview(BaseModel):
    """Linha por questao da tela de resultados."""

    position: int = Field(..., description="Posicao no working set (base 1)")
    question_id: str
    question: str
    answered: bool
    is_correct: bool
    selected: list[str]
    correct_answer: list[str]


class ExamSummary(BaseModel):
    """Nota final com revisao por questao."""

    correct: int
    incorrect: int
    total: int
    percentage: int = Field(..., description="Porcentagem arredondada (0-100)")
    passed: bool
    pass_threshold: float
    title: str
    message: str
    review: list[QuestionReview]
