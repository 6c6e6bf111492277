"""Pydantic models for quiz definition files (JSON)."""
from __future__ import annotations

import abc
import logging
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from moodle_quiz import config
from moodle_quiz.models.answer import Answer
from moodle_quiz.models.question import (
    EssayQuestion,
    MultiChoiceQuestion,
    Question,
    ShortAnswerQuestion,
    TrueFalseQuestion,
)
from moodle_quiz.models.quiz import Quiz
from moodle_quiz.models.text_format import TextFormat

log = logging.getLogger(__name__)


class AnswerDefinition(BaseModel):
    """One answer of a question definition."""

    model_config = ConfigDict(extra="forbid")

    fraction: int
    text: str
    feedback: str | None = None
    format: TextFormat = TextFormat.HTML

    def build(self) -> Answer:
        return Answer(self.fraction, self.text, self.feedback, self.format)


class _QuestionDefinition(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    text: str
    format: TextFormat = TextFormat.HTML
    answers: list[AnswerDefinition] = Field(default_factory=list)

    @abc.abstractmethod
    def _create(self) -> Question:
        """Instantiate the concrete question, without answers."""

    def build(self) -> Question:
        """Create the question and attach its answers (validated)."""
        question = self._create()
        question.set_text_format(self.format)
        if self.answers:
            question.add_answers([answer.build() for answer in self.answers])
        return question


class MultiChoiceDefinition(_QuestionDefinition):
    type: Literal["multichoice"]
    single: bool = True
    shuffle: bool = True
    correct_feedback: str = ""
    partially_correct_feedback: str = ""
    incorrect_feedback: str = ""
    answer_numbering: str = config.DEFAULT_ANSWER_NUMBERING

    def _create(self) -> Question:
        return MultiChoiceQuestion(
            self.name,
            self.text,
            single=self.single,
            shuffle=self.shuffle,
            correct_feedback=self.correct_feedback,
            partially_correct_feedback=self.partially_correct_feedback,
            incorrect_feedback=self.incorrect_feedback,
            answer_numbering=self.answer_numbering,
        )


class TrueFalseDefinition(_QuestionDefinition):
    type: Literal["truefalse"]

    def _create(self) -> Question:
        return TrueFalseQuestion(self.name, self.text)


class ShortAnswerDefinition(_QuestionDefinition):
    type: Literal["shortanswer"]
    case_sensitive: bool = False

    def _create(self) -> Question:
        return ShortAnswerQuestion(self.name, self.text, self.case_sensitive)


class EssayDefinition(_QuestionDefinition):
    type: Literal["essay"]

    def _create(self) -> Question:
        return EssayQuestion(self.name, self.text)


QuestionDefinition = Annotated[
    Union[
        MultiChoiceDefinition,
        TrueFalseDefinition,
        ShortAnswerDefinition,
        EssayDefinition,
    ],
    Field(discriminator="type"),
]


class QuizDefinition(BaseModel):
    """Whole quiz definition file."""

    model_config = ConfigDict(extra="forbid")

    categories: list[Annotated[str, Field(min_length=1)]] = Field(
        default_factory=list
    )
    questions: list[QuestionDefinition] = Field(default_factory=list)

    def build(self) -> Quiz:
        quiz = Quiz(
            questions=[question.build() for question in self.questions],
            categories=self.categories,
        )
        log.info("Quiz built from definition: %d question(s)", len(quiz))
        return quiz


def load_quiz_definition(path: Path) -> QuizDefinition:
    """Read and validate a JSON quiz definition."""
    return QuizDefinition.model_validate_json(Path(path).read_text(encoding="utf-8"))
