import pytest
from lxml import etree

from moodle_quiz.errors import (
    AnswerCountError,
    AnswerFractionError,
    InsufficientFractionError,
    InvalidFractionError,
    NoAnswersError,
)
from moodle_quiz.models.answer import Answer
from moodle_quiz.models.question import (
    EssayQuestion,
    MultiChoiceQuestion,
    ShortAnswerQuestion,
    TrueFalseQuestion,
)
from moodle_quiz.models.text_format import TextFormat


def test_multichoice_question_xml(render) -> None:
    question = MultiChoiceQuestion(
        "Name of question",
        "What is the answer to this question?",
        single=True,
        shuffle=True,
        correct_feedback="Correct!",
        partially_correct_feedback="Partially correct!",
        incorrect_feedback="Incorrect!",
        answer_numbering="abc",
    )
    question.add_answers(
        [
            Answer(100, "The correct answer", "Correct!"),
            Answer(0, "A distractor", "Ooops!"),
            Answer(0, "Another distractor", "Ooops!"),
        ]
    )

    expected = """<question type="multichoice">
  <name>
    <text>Name of question</text>
  </name>
  <questiontext format="html">
    <text><![CDATA[What is the answer to this question?]]></text>
  </questiontext>
  <answer fraction="100" format="html">
    <text>The correct answer</text>
    <feedback format="html">
      <text>Correct!</text>
    </feedback>
  </answer>
  <answer fraction="0" format="html">
    <text>A distractor</text>
    <feedback format="html">
      <text>Ooops!</text>
    </feedback>
  </answer>
  <answer fraction="0" format="html">
    <text>Another distractor</text>
    <feedback format="html">
      <text>Ooops!</text>
    </feedback>
  </answer>
  <single>true</single>
  <shuffleanswers>1</shuffleanswers>
  <correctfeedback format="html">
    <text>Correct!</text>
  </correctfeedback>
  <partiallycorrectfeedback format="html">
    <text>Partially correct!</text>
  </partiallycorrectfeedback>
  <incorrectfeedback format="html">
    <text>Incorrect!</text>
  </incorrectfeedback>
  <answernumbering>abc</answernumbering>
</question>"""
    assert render(question) == expected


def test_multichoice_false_flags(render) -> None:
    question = MultiChoiceQuestion("q", "d", single=False, shuffle=False)
    question.add_answers([Answer(50, "a"), Answer(50, "b")])
    root = etree.fromstring(render(question))
    assert root.findtext("single") == "false"
    assert root.findtext("shuffleanswers") == "0"
    children = [child.tag for child in root]
    assert children[-6:] == [
        "single",
        "shuffleanswers",
        "correctfeedback",
        "partiallycorrectfeedback",
        "incorrectfeedback",
        "answernumbering",
    ]


def test_question_text_format_is_settable(render) -> None:
    question = ShortAnswerQuestion("q", "**bold**")
    question.set_text_format(TextFormat.MARKDOWN)
    question.add_answer(Answer(100, "x"))
    assert question.text_format is TextFormat.MARKDOWN
    root = etree.fromstring(render(question))
    assert root.find("questiontext").get("format") == "markdown"


def test_accessors() -> None:
    question = EssayQuestion("Essay", "Write about S")
    assert question.name == "Essay"
    assert question.description == "Write about S"
    assert question.answers == ()


@pytest.mark.parametrize(
    "question",
    [
        MultiChoiceQuestion("mc", "d"),
        TrueFalseQuestion("tf", "d"),
        ShortAnswerQuestion("sa", "d"),
    ],
)
def test_question_without_answers_fails(render, question) -> None:
    with pytest.raises(NoAnswersError):
        render(question)


@pytest.mark.parametrize(
    "question", [MultiChoiceQuestion("mc", "d"), ShortAnswerQuestion("sa", "d")]
)
def test_insufficient_fraction_clears_all_answers(question) -> None:
    with pytest.raises(InsufficientFractionError) as exc_info:
        question.add_answers([Answer(30, "partly"), Answer(20, "less")])
    assert exc_info.value.total == 50
    assert question.answers == ()


def test_answers_accumulate_across_calls() -> None:
    question = MultiChoiceQuestion("mc", "d")
    question.add_answers([Answer(60, "a"), Answer(40, "b")])
    question.add_answers(Answer(0, "c"))
    assert [a.fraction for a in question.answers] == [60, 40, 0]


def test_failed_addition_wipes_previous_valid_answers() -> None:
    question = ShortAnswerQuestion("sa", "d")
    question.add_answers([Answer(100, "Superman")])

    # a penalty answer drags the total below 100
    with pytest.raises(InsufficientFractionError) as exc_info:
        question.add_answer(Answer(-70, "Batman"))
    assert exc_info.value.total == 30
    assert question.answers == ()


def test_more_than_hundred_in_total_is_allowed() -> None:
    question = MultiChoiceQuestion("mc", "d", single=False)
    question.add_answers([Answer(100, "a"), Answer(100, "b")])
    assert len(question.answers) == 2


def test_answer_over_hundred_fails_at_serialize(render) -> None:
    question = ShortAnswerQuestion("Easy question", "Kenella on S rinnassa")
    question.add_answer(Answer(200, "Superman", "Oikein"))
    with pytest.raises(InvalidFractionError):
        render(question)


def test_add_answers_rejects_non_answers() -> None:
    question = MultiChoiceQuestion("mc", "d")
    with pytest.raises(TypeError):
        question.add_answers(["not an answer"])


@pytest.mark.parametrize(
    "fractions", [(100, 0), (0, 100)]
)
def test_true_false_accepts_hundred_and_zero(render, fractions) -> None:
    question = TrueFalseQuestion("tf", "The sky is blue")
    question.add_answers([Answer(fractions[0], "true"), Answer(fractions[1], "false")])
    root = etree.fromstring(render(question))
    assert root.get("type") == "truefalse"
    assert [a.get("fraction") for a in root.findall("answer")] == [
        str(f) for f in fractions
    ]


@pytest.mark.parametrize("count", [0, 1, 3])
def test_true_false_needs_exactly_two_answers(count: int) -> None:
    question = TrueFalseQuestion("tf", "d")
    answers = [Answer(100, "a")] + [Answer(0, "b")] * (count - 1)
    with pytest.raises(AnswerCountError):
        question.add_answers(answers[:count])


@pytest.mark.parametrize(
    "fractions", [(100, 100), (50, 50), (0, 0), (100, 50), (90, 10), (101, 0)]
)
def test_true_false_rejects_other_fractions(fractions) -> None:
    question = TrueFalseQuestion("tf", "d")
    with pytest.raises(AnswerFractionError):
        question.add_answers([Answer(fractions[0], "a"), Answer(fractions[1], "b")])
    assert question.answers == ()


def test_true_false_failed_call_resets_answers() -> None:
    question = TrueFalseQuestion("tf", "d")
    question.add_answers([Answer(100, "true"), Answer(0, "false")])
    with pytest.raises(AnswerCountError):
        question.add_answers([Answer(100, "true")])
    assert question.answers == ()


def test_true_false_second_pair_replaces_first() -> None:
    question = TrueFalseQuestion("tf", "d")
    question.add_answers([Answer(100, "true"), Answer(0, "false")])
    question.add_answers([Answer(0, "yes"), Answer(100, "no")])
    assert [a.text for a in question.answers] == ["yes", "no"]


def test_short_answer_usecase(render) -> None:
    question = ShortAnswerQuestion("Easy question", "Kenella on S rinnassa", case_sensitive=True)
    question.add_answer(Answer(100, "Superman", "Oikein"))
    root = etree.fromstring(render(question))
    assert root.get("type") == "shortanswer"
    assert root[-1].tag == "usecase"
    assert root.findtext("usecase") == "1"

    question.case_sensitive = False
    assert etree.fromstring(render(question)).findtext("usecase") == "0"


def test_essay_accepts_empty_answers_only() -> None:
    question = EssayQuestion("Essay", "Explain")
    question.add_answers([])
    with pytest.raises(AnswerCountError):
        question.add_answers([Answer(100, "no")])
    assert question.answers == ()


def test_essay_serializes_without_answers(render) -> None:
    question = EssayQuestion("Essay", "<p>Explain</p>")
    root = etree.fromstring(render(question))
    assert root.get("type") == "essay"
    assert root.findtext("questiontext/text") == "<p>Explain</p>"
    assert root.find("answer") is None


def test_special_characters_round_trip(render) -> None:
    description = "(),./;'\"[]-=<>?:{}|\\_+!@#$%^&*()`~"
    question = ShortAnswerQuestion("TRUE", description)
    question.add_answer(Answer(100, "NaN", "1E02"))
    root = etree.fromstring(render(question))
    assert root.findtext("questiontext/text") == description
    assert root.findtext("answer/feedback/text") == "1E02"
