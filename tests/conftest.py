import io
from typing import Callable

import pytest

from moodle_quiz.xml_writer import QuizXmlWriter


def _render(item, indent: int = 2) -> str:
    buffer = io.BytesIO()
    with QuizXmlWriter.open(buffer, indent=indent, xml_declaration=False) as writer:
        item.serialize(writer)
    return buffer.getvalue().decode("utf-8")


@pytest.fixture
def render() -> Callable[..., str]:
    """Serialize a single answer or question without the XML declaration."""
    return _render
