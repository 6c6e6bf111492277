"""Errors raised while building or serializing a quiz."""
from __future__ import annotations


class QuizError(Exception):
    """Base class for every quiz, question and answer failure."""


class WriterError(QuizError):
    """The output sink or the XML serializer failed."""

    def __init__(self, message: str, original: BaseException | None = None):
        super().__init__(message)
        self.original = original


class EmptyError(QuizError):
    """A quiz or a question has nothing to serialize."""


class NoAnswersError(EmptyError):
    def __init__(self, question_name: str):
        super().__init__(f"Question {question_name!r} has no answers")
        self.question_name = question_name


class NoQuestionsError(EmptyError):
    def __init__(self) -> None:
        super().__init__("Quiz has no questions")


class InvalidFractionError(QuizError, ValueError):
    """A single answer awards more than 100 percent (or less than 0)."""

    def __init__(self, fraction: int):
        super().__init__(f"Answer fraction {fraction} is outside 0..100")
        self.fraction = fraction


class InsufficientFractionError(QuizError, ValueError):
    """The answers of a question add up to less than 100 percent.

    Raising this also clears every answer of the question.
    """

    def __init__(self, total: int):
        super().__init__(
            f"The total fraction of answers must be at least 100, got {total}"
        )
        self.total = total


class AnswerCountError(QuizError, ValueError):
    """Wrong number of answers for the question type."""


class AnswerFractionError(QuizError, ValueError):
    """Answer fractions not allowed for the question type."""
