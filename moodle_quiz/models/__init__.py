"""Quiz, question and answer models."""
from moodle_quiz.models.text_format import TextFormat
from moodle_quiz.models.answer import Answer
from moodle_quiz.models.question import (
    EssayQuestion,
    MultiChoiceQuestion,
    Question,
    ShortAnswerQuestion,
    TrueFalseQuestion,
)
from moodle_quiz.models.quiz import Quiz

__all__ = [
    "Answer",
    "EssayQuestion",
    "MultiChoiceQuestion",
    "Question",
    "Quiz",
    "ShortAnswerQuestion",
    "TextFormat",
    "TrueFalseQuestion",
]
