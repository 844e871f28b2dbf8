"""Exam Scoring Engine - Correcao, contagem e veredito de aprovacao."""

from collections.abc import Collection, Mapping, Sequence

from ..models.enums import OptionFeedback
from ..models.schemas import ExamQuestion, ExamSummary, QuestionReview, ScoreResult


class ExamScoringEngine:
    """Motor de pontuacao de tentativas.

    Uma questao so conta como correta quando a selecao e igual ao gabarito
    como conjunto. Nao ha credito parcial: 2 de 3 opcoes corretas, sem
    nenhuma errada, continua incorreta. Questoes nao respondidas sao
    incorretas e continuam no denominador.

    Veredito:
        - percentage >= pass_threshold: aprovado
        - caso contrario: continuar praticando

    Example:
        >>> engine = ExamScoringEngine(pass_threshold=70)
        >>> result = engine.score(working_set, {0: {"A"}, 1: {"A"}})
        >>> engine.percentage(result)
        50
    """

    DEFAULT_PASS_THRESHOLD = 70.0

    # (passed, title, message)
    VERDICTS = {
        True: (
            "Congratulations! You passed!",
            "You reached the passing score for this practice exam.",
        ),
        False: (
            "Keep practicing!",
            "Review the questions you missed and retake the exam with a new shuffle.",
        ),
    }

    def __init__(self, pass_threshold: float = DEFAULT_PASS_THRESHOLD):
        """Inicializa engine.

        Args:
            pass_threshold: Porcentagem minima de aprovacao (0-100)
        """
        if not 0 <= pass_threshold <= 100:
            raise ValueError(f"pass_threshold must be between 0 and 100, got {pass_threshold}")
        self.pass_threshold = float(pass_threshold)

    # -------------------------------------------------------------------------
    # Questao individual
    # -------------------------------------------------------------------------

    @staticmethod
    def is_correct(question: ExamQuestion, selection: Collection[str]) -> bool:
        """Igualdade de conjuntos entre selecao e gabarito."""
        return set(selection) == set(question.correct_answer)

    @staticmethod
    def classify_option(
        question: ExamQuestion, option_id: str, selection: Collection[str]
    ) -> OptionFeedback:
        """Classe de feedback de uma opcao apos revelar a resposta."""
        selected = option_id in selection
        correct = question.is_key_option(option_id)

        if selected and correct:
            return OptionFeedback.CORRECT_SELECTED
        if selected:
            return OptionFeedback.WRONG_SELECTED
        if correct:
            return OptionFeedback.MISSED
        return OptionFeedback.NEUTRAL

    def evaluate_answer(self, question: ExamQuestion, selection: Collection[str]) -> dict:
        """Avalia uma resposta submetida.

        Args:
            question: Questao respondida
            selection: Ids das opcoes selecionadas

        Returns:
            Dict com is_correct, headline, message, correct_answer
        """
        is_correct = self.is_correct(question, selection)
        correct_answer = sorted(question.correct_answer)

        if is_correct:
            headline = "Well done!"
            message = "You selected the correct answer. Keep up the great work!"
        else:
            headline = "Learn from this:"
            if question.multiple_answers:
                message = f"The correct answers are: {question.correct_answer_label}"
            else:
                message = f"The correct answer is: {question.correct_answer_label}"

        return {
            "is_correct": is_correct,
            "headline": headline,
            "message": message,
            "correct_answer": correct_answer,
        }

    # -------------------------------------------------------------------------
    # Tentativa completa
    # -------------------------------------------------------------------------

    def score(
        self,
        working_set: Sequence[ExamQuestion],
        selections: Mapping[int, Collection[str]],
    ) -> ScoreResult:
        """Conta acertos em todo o working set."""
        correct = sum(
            1
            for index, question in enumerate(working_set)
            if self.is_correct(question, selections.get(index, ()))
        )
        return ScoreResult(correct=correct, total=len(working_set))

    @staticmethod
    def percentage(result: ScoreResult) -> int:
        """Porcentagem arredondada de acertos (0 para contagem vazia)."""
        if result.total == 0:
            return 0
        return round(result.correct / result.total * 100)

    def calculate_verdict(self, percentage: float) -> tuple[bool, str, str]:
        """Veredito de aprovacao para uma porcentagem.

        Returns:
            Tupla (passed, title, message)
        """
        passed = percentage >= self.pass_threshold
        title, message = self.VERDICTS[passed]
        return passed, title, message

    def review(
        self,
        working_set: Sequence[ExamQuestion],
        selections: Mapping[int, Collection[str]],
    ) -> list[QuestionReview]:
        """Linhas de revisao por questao, na ordem do working set."""
        lines = []
        for index, question in enumerate(working_set):
            selection = selections.get(index, ())
            lines.append(
                QuestionReview(
                    position=index + 1,
                    question_id=question.id,
                    question=question.question,
                    answered=bool(selection),
                    is_correct=self.is_correct(question, selection),
                    selected=sorted(selection),
                    correct_answer=sorted(question.correct_answer),
                )
            )
        return lines

    def summarize(
        self,
        working_set: Sequence[ExamQuestion],
        selections: Mapping[int, Collection[str]],
    ) -> ExamSummary:
        """Nota final, veredito e revisao de uma tentativa."""
        result = self.score(working_set, selections)
        # Veredito usa a razao exata; o valor arredondado e so para exibicao
        exact = result.correct / result.total * 100 if result.total else 0.0
        passed, title, message = self.calculate_verdict(exact)

        return ExamSummary(
            correct=result.correct,
            incorrect=result.incorrect,
            total=result.total,
            percentage=self.percentage(result),
            passed=passed,
            pass_threshold=self.pass_threshold,
            title=title,
            message=message,
            review=self.review(working_set, selections),
        )
