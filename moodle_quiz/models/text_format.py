from __future__ import annotations

import enum


class TextFormat(str, enum.Enum):
    """How Moodle renders a block of text (question text, answers, feedback)."""

    HTML = "html"  # default
    MOODLE_AUTO_FORMAT = "moodle_auto_format"
    MARKDOWN = "markdown"
    PLAIN_TEXT = "plain_text"

    @property
    def attribute(self) -> str:
        """Value used for the ``format`` attribute."""
        return self.value
