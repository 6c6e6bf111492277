"""Output configuration and constants."""
import os


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_bool_env(name: str, default: bool) -> bool:
    """Parse boolean flag from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# XML output
ENCODING = os.environ.get("MOODLE_QUIZ_ENCODING", "utf-8")
INDENT = max(_parse_int_env("MOODLE_QUIZ_INDENT", 2), 0)
XML_DECLARATION = _parse_bool_env("MOODLE_QUIZ_XML_DECLARATION", True)

# Moodle conventions
CATEGORY_PREFIX = "$course$/"
DEFAULT_ANSWER_NUMBERING = "abc"

# Word import
CORRECT_SYMBOL = os.environ.get("MOODLE_QUIZ_CORRECT_SYMBOL", "*")
MIN_TABLE_ROWS = 3
