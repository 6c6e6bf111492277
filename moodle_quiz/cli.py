import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from moodle_quiz import config
from moodle_quiz.errors import QuizError
from moodle_quiz.logging_setup import level_for_verbosity, setup_console_logging
from moodle_quiz.models.definition import load_quiz_definition
from moodle_quiz.models.quiz import Quiz
from moodle_quiz.word_extract import WordQuizExtractor

log = logging.getLogger("moodle_quiz.cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="moodle-quiz", description="Export quizzes as Moodle XML"
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)
    parser.add_argument("-q", "--quiet", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Convert a JSON quiz definition")
    build.add_argument("definition", type=Path, help="Path to the .json definition")

    word = sub.add_parser("import-docx", help="Convert the tables of a Word file")
    word.add_argument("file", type=Path, help="Path to a .docx file")
    word.add_argument(
        "--symbol",
        type=str,
        default=config.CORRECT_SYMBOL,
        help="Correct answer marker symbol",
    )
    word.add_argument(
        "--category",
        action="append",
        default=[],
        help="Moodle category to import into (repeatable)",
    )
    word.add_argument(
        "--log-small-tables",
        action="store_true",
        help="Report tables with fewer than 3 rows",
    )

    for p in (build, word):
        p.add_argument(
            "-o",
            "--output",
            type=Path,
            default=None,
            help="Output .xml file (default: input name with .xml suffix)",
        )
    return parser.parse_args(argv)


def _quiz_from_docx(args: argparse.Namespace) -> Quiz:
    extractor = WordQuizExtractor(args.file, args.symbol, args.log_small_tables)
    questions = extractor.extract()
    for line in extractor.logs:
        log.info(line)
    return Quiz(questions, categories=args.category)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_console_logging(level_for_verbosity(args.verbose, args.quiet))

    source = args.definition if args.command == "build" else args.file
    output = args.output or source.with_suffix(".xml")
    try:
        if args.command == "build":
            quiz = load_quiz_definition(source).build()
        else:
            quiz = _quiz_from_docx(args)
        quiz.write_file(output)
    except (QuizError, ValidationError, ValueError, OSError) as exc:
        log.error("%s: %s", source, exc)
        return 1

    print(f"Saved quiz to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
