from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from moodle_quiz.errors import InvalidFractionError
from moodle_quiz.models.text_format import TextFormat

if TYPE_CHECKING:
    from moodle_quiz.xml_writer import QuizXmlWriter

log = logging.getLogger(__name__)

MAX_FRACTION = 100


@dataclass
class Answer:
    """
    One response option of a question.

    ``fraction`` is the percentage of credit (0..100) the answer gives. It is
    not checked here: an out of range answer can be built, it only fails
    when it is serialized.
    """

    fraction: int
    text: str
    feedback: str | None = None
    text_format: TextFormat = TextFormat.HTML

    def set_text_format(self, text_format: TextFormat) -> None:
        """Format used for both the answer text and its feedback."""
        self.text_format = TextFormat(text_format)

    def validate(self) -> None:
        if not 0 <= self.fraction <= MAX_FRACTION:
            raise InvalidFractionError(self.fraction)

    def serialize(self, writer: QuizXmlWriter) -> None:
        self.validate()
        attrib = {"fraction": str(self.fraction)}
        with writer.scope("answer", attrib, text_format=self.text_format):
            writer.text_tag(self.text)
            if self.feedback is not None:
                writer.formatted_text("feedback", self.feedback, self.text_format)
        log.debug("Answer written: fraction=%s", self.fraction)
