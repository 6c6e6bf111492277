from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Iterable

from moodle_quiz import config
from moodle_quiz.errors import NoQuestionsError
from moodle_quiz.models.question import Question, _QuestionVariant
from moodle_quiz.xml_writer import QuizXmlWriter, Target

log = logging.getLogger(__name__)


def category_path(category: str) -> str:
    return f"{config.CATEGORY_PREFIX}{category}/"


class Quiz:
    """
    Ordered questions plus optional category labels, written as one Moodle
    XML ``<quiz>`` document. Categories come first, each as a
    ``type="category"`` pseudo-question, in the order they were given.
    """

    def __init__(
        self,
        questions: Iterable[Question] | None = None,
        categories: Iterable[str] | None = None,
    ):
        self.questions: list[Question] = []
        self.categories: list[str] = []
        if questions is not None:
            self.add_questions(questions)
        if categories is not None:
            self.set_categories(categories)

    def add_question(self, question: Question) -> None:
        if not isinstance(question, _QuestionVariant):
            raise TypeError(f"Expected a question, got {type(question).__name__}")
        self.questions.append(question)

    def add_questions(self, questions: Iterable[Question]) -> None:
        for question in questions:
            self.add_question(question)

    def set_categories(self, categories: Iterable[str]) -> None:
        if isinstance(categories, str):
            raise TypeError("Categories must be a list of names, not a single string")
        cleaned = list(categories)
        for category in cleaned:
            if not isinstance(category, str) or not category.strip():
                raise ValueError("Category names must be non-empty strings")
        self.categories = cleaned

    def serialize(
        self,
        target: Target,
        *,
        encoding: str | None = None,
        indent: int | None = None,
    ) -> None:
        """
        Write the quiz to ``target``: a path or an open binary file.

        The first failing question aborts the whole write. Whatever was
        already written stays in ``target``.
        """
        if not self.questions:
            raise NoQuestionsError()

        with QuizXmlWriter.open(target, encoding=encoding, indent=indent) as writer:
            with writer.scope("quiz"):
                for category in self.categories:
                    self._write_category(writer, category)
                if not self.questions:
                    raise NoQuestionsError()
                for question in self.questions:
                    question.serialize(writer)

        log.info(
            "Quiz written: questions=%d categories=%d",
            len(self.questions),
            len(self.categories),
        )

    @staticmethod
    def _write_category(writer: QuizXmlWriter, category: str) -> None:
        with writer.scope("question", {"type": "category"}):
            with writer.scope("category"):
                writer.text_tag(category_path(category))

    def to_bytes(self, **kwargs) -> bytes:
        buffer = io.BytesIO()
        self.serialize(buffer, **kwargs)
        return buffer.getvalue()

    def write_file(self, path: str | Path, **kwargs) -> Path:
        """Serialize into ``path``, creating missing parent directories."""
        if not self.questions:
            raise NoQuestionsError()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as fh:
            self.serialize(fh, **kwargs)
        return path

    def __len__(self) -> int:
        return len(self.questions)
