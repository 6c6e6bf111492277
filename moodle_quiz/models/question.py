"""
Question types of the Moodle XML format.

Every question type embeds a ``QuestionBase`` holding the fields all of them
share (name, question text, text format, answers) and layers its own answer
rules and extra XML elements around it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ClassVar, Iterable, Union

from moodle_quiz import config
from moodle_quiz.errors import (
    AnswerCountError,
    AnswerFractionError,
    InsufficientFractionError,
    NoAnswersError,
)
from moodle_quiz.models.answer import MAX_FRACTION, Answer
from moodle_quiz.models.text_format import TextFormat
from moodle_quiz.xml_writer import QuizXmlWriter, bool_digit, bool_word

log = logging.getLogger(__name__)

AnswerInput = Union[Answer, Iterable[Answer]]


def _answer_list(answers: AnswerInput) -> list[Answer]:
    if isinstance(answers, Answer):
        return [answers]
    items = list(answers)
    for item in items:
        if not isinstance(item, Answer):
            raise TypeError(f"Expected Answer, got {type(item).__name__}")
    return items


@dataclass
class QuestionBase:
    """Shared part of every question type. Not used on its own."""

    name: str
    description: str
    text_format: TextFormat = TextFormat.HTML
    answers: list[Answer] = field(default_factory=list)

    def total_fraction(self) -> int:
        return sum(answer.fraction for answer in self.answers)

    def check_answer_fraction(self) -> None:
        """
        The answers must add up to at least 100. More is fine, several answers
        can be fully correct. On failure every answer is dropped, not only the
        last added ones.
        """
        total = self.total_fraction()
        if total < MAX_FRACTION:
            log.warning(
                "Discarding %d answer(s) of %r: total fraction %d < %d",
                len(self.answers),
                self.name,
                total,
                MAX_FRACTION,
            )
            self.answers.clear()
            raise InsufficientFractionError(total)

    def add_answers(self, answers: list[Answer]) -> None:
        self.answers.extend(answers)
        self.check_answer_fraction()

    def write_xml(self, writer: QuizXmlWriter, require_answers: bool = True) -> None:
        with writer.scope("name"):
            writer.text_tag(self.name)
        # the question text may carry HTML, keep it verbatim
        writer.formatted_text(
            "questiontext", self.description, self.text_format, cdata=True
        )
        if require_answers and not self.answers:
            raise NoAnswersError(self.name)
        for answer in self.answers:
            answer.serialize(writer)


class _QuestionVariant:
    """Plumbing shared by the concrete question types."""

    question_type: ClassVar[str]

    def __init__(self, name: str, description: str):
        self._base = QuestionBase(name, description)

    @property
    def name(self) -> str:
        return self._base.name

    @property
    def description(self) -> str:
        return self._base.description

    @property
    def text_format(self) -> TextFormat:
        return self._base.text_format

    @property
    def answers(self) -> tuple[Answer, ...]:
        return tuple(self._base.answers)

    def set_text_format(self, text_format: TextFormat) -> None:
        """Format Moodle uses to render the question text."""
        self._base.text_format = TextFormat(text_format)

    def add_answer(self, answer: Answer) -> None:
        self.add_answers([answer])

    def add_answers(self, answers: AnswerInput) -> None:
        self._base.add_answers(_answer_list(answers))

    def serialize(self, writer: QuizXmlWriter) -> None:
        with writer.scope("question", {"type": self.question_type}):
            self._write_body(writer)
        log.debug("Question written: %s %r", self.question_type, self.name)

    def _write_body(self, writer: QuizXmlWriter) -> None:
        self._base.write_xml(writer)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"answers={len(self._base.answers)})"
        )


class MultiChoiceQuestion(_QuestionVariant):
    question_type = "multichoice"

    def __init__(
        self,
        name: str,
        description: str,
        single: bool = True,
        shuffle: bool = True,
        correct_feedback: str = "",
        partially_correct_feedback: str = "",
        incorrect_feedback: str = "",
        answer_numbering: str = config.DEFAULT_ANSWER_NUMBERING,
    ):
        super().__init__(name, description)
        self.single = single
        self.shuffle = shuffle
        self.correct_feedback = correct_feedback
        self.partially_correct_feedback = partially_correct_feedback
        self.incorrect_feedback = incorrect_feedback
        self.answer_numbering = answer_numbering

    def _write_body(self, writer: QuizXmlWriter) -> None:
        self._base.write_xml(writer)
        # single is true/false, shuffleanswers is 1/0 in Moodle's own exports
        writer.value_tag("single", bool_word(self.single))
        writer.value_tag("shuffleanswers", bool_digit(self.shuffle))
        writer.formatted_text("correctfeedback", self.correct_feedback)
        writer.formatted_text(
            "partiallycorrectfeedback", self.partially_correct_feedback
        )
        writer.formatted_text("incorrectfeedback", self.incorrect_feedback)
        writer.value_tag("answernumbering", self.answer_numbering)


class TrueFalseQuestion(_QuestionVariant):
    """
    Exactly two answers, one worth 100 and the other 0, given in a single
    call. A valid call replaces the previous pair; a rejected call leaves the
    question without answers.
    """

    question_type = "truefalse"

    def add_answers(self, answers: AnswerInput) -> None:
        items = _answer_list(answers)
        self._base.answers.clear()
        if len(items) != 2:
            raise AnswerCountError(
                f"True/False questions must have exactly 2 answers, got {len(items)}"
            )
        if sorted(answer.fraction for answer in items) != [0, MAX_FRACTION]:
            raise AnswerFractionError(
                "Only fractions 100 and 0 are allowed in True/False questions"
            )
        self._base.add_answers(items)


class ShortAnswerQuestion(_QuestionVariant):
    question_type = "shortanswer"

    def __init__(self, name: str, description: str, case_sensitive: bool = False):
        super().__init__(name, description)
        self.case_sensitive = case_sensitive

    def _write_body(self, writer: QuizXmlWriter) -> None:
        self._base.write_xml(writer)
        writer.value_tag("usecase", bool_digit(self.case_sensitive))


class EssayQuestion(_QuestionVariant):
    """Free text question, graded by hand. It never has answers."""

    question_type = "essay"

    def add_answers(self, answers: AnswerInput) -> None:
        items = _answer_list(answers)
        if items:
            raise AnswerCountError("Essay questions must not have any answers")

    def _write_body(self, writer: QuizXmlWriter) -> None:
        self._base.write_xml(writer, require_answers=False)


Question = Union[
    MultiChoiceQuestion, TrueFalseQuestion, ShortAnswerQuestion, EssayQuestion
]
