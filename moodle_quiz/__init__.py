"""
moodle-quiz: build quizzes in Python and export them as Moodle XML.
"""

__version__ = "0.1.0"

from moodle_quiz.models import (
    Answer,
    EssayQuestion,
    MultiChoiceQuestion,
    Question,
    Quiz,
    ShortAnswerQuestion,
    TextFormat,
    TrueFalseQuestion,
)
from moodle_quiz.errors import (
    AnswerCountError,
    AnswerFractionError,
    EmptyError,
    InsufficientFractionError,
    InvalidFractionError,
    NoAnswersError,
    NoQuestionsError,
    QuizError,
    WriterError,
)
from moodle_quiz.xml_writer import QuizXmlWriter

__all__ = [
    # Models
    "Answer",
    "EssayQuestion",
    "MultiChoiceQuestion",
    "Question",
    "Quiz",
    "ShortAnswerQuestion",
    "TextFormat",
    "TrueFalseQuestion",
    # Errors
    "AnswerCountError",
    "AnswerFractionError",
    "EmptyError",
    "InsufficientFractionError",
    "InvalidFractionError",
    "NoAnswersError",
    "NoQuestionsError",
    "QuizError",
    "WriterError",
    # Writer
    "QuizXmlWriter",
]
