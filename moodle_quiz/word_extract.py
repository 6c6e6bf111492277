from __future__ import annotations

import html
import logging
from pathlib import Path

from docx import Document

from moodle_quiz import config
from moodle_quiz.models.answer import MAX_FRACTION, Answer
from moodle_quiz.models.question import MultiChoiceQuestion

log = logging.getLogger(__name__)

NS = {
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
}


def split_credit(correct_count: int) -> list[int]:
    """Share 100 between the correct options, remainder to the first one."""
    if correct_count <= 0:
        return []
    share, remainder = divmod(MAX_FRACTION, correct_count)
    return [share + remainder] + [share] * (correct_count - 1)


class WordQuizExtractor:
    """
    Reads multiple choice questions from the tables of a .docx file.

    One table is one question: the first row holds the question text, every
    following row one option. Options starting with ``symbol`` are correct;
    when nothing is marked the first option is the correct one.
    """

    def __init__(
            self,
            file_path: Path,
            symbol: str = config.CORRECT_SYMBOL,
            log_small_tables: bool = False,
    ):
        self.file_path = Path(file_path)
        self.symbol = symbol
        self.log_small_tables = log_small_tables
        self.logs: list[str] = []  # short per-file report for the CLI

    def _load_document(self):
        if self.file_path.suffix.lower() == ".doc":
            raise ValueError(
                f"Legacy .doc files are not supported, save {self.file_path.name} as .docx"
            )
        if not self.file_path.exists():
            raise FileNotFoundError(self.file_path)
        return Document(self.file_path)

    # ---- Cell text ----
    @staticmethod
    def _paragraphs_from_cell(cell) -> list[str]:
        paragraphs: list[str] = []
        for block in cell._tc.iterchildren():
            if not block.tag.endswith("}p"):
                continue
            parts: list[str] = []
            for child in block.iter():
                tag = child.tag
                if not isinstance(tag, str):
                    continue
                if tag.endswith("}t") and child.text:
                    parts.append(child.text)
                elif tag.endswith("}br") or tag.endswith("}cr"):
                    parts.append("\n")
            paragraphs.append("".join(parts))

        while paragraphs and not paragraphs[-1].strip():
            paragraphs.pop()
        return paragraphs

    def _row_paragraphs(self, row) -> list[str]:
        paragraphs: list[str] = []
        seen: set[int] = set()
        # merged cells show up once per grid column
        for cell in row.cells:
            if id(cell._tc) in seen:
                continue
            seen.add(id(cell._tc))
            paragraphs.extend(self._paragraphs_from_cell(cell))
        return paragraphs

    @staticmethod
    def _row_has_any_content_fast(row) -> bool:
        for cell in row.cells:
            for t in cell._tc.iterfind(".//w:t", namespaces=NS):
                if t.text and t.text.strip():
                    return True
        return False

    def _strip_symbol(self, paragraphs: list[str]) -> bool:
        if not self.symbol:
            return False
        for index, text in enumerate(paragraphs):
            s = text.lstrip()
            if not s:
                continue
            if s.startswith(self.symbol):
                paragraphs[index] = s[len(self.symbol):].lstrip()
                return True
            return False
        return False

    @staticmethod
    def _question_html(paragraphs: list[str]) -> str:
        return "".join(
            f"<p>{html.escape(p).replace(chr(10), '<br>')}</p>" for p in paragraphs
        )

    def _build_question(self, index: int, rows: list[list[str]]) -> MultiChoiceQuestion:
        options = rows[1:]
        marked = [self._strip_symbol(option) for option in options]
        if not any(marked):
            marked[0] = True

        credits = iter(split_credit(sum(marked)))
        answers = [
            Answer(next(credits) if is_correct else 0, "\n".join(option).strip())
            for option, is_correct in zip(options, marked)
        ]

        question = MultiChoiceQuestion(
            f"{self.file_path.stem} {index:03d}",
            self._question_html(rows[0]),
            single=sum(marked) == 1,
        )
        question.add_answers(answers)
        return question

    def extract(self) -> list[MultiChoiceQuestion]:
        log.info("=== EXTRACT START: %s ===", self.file_path)
        self.logs.clear()
        self.logs.append(f"File: {self.file_path.name}")

        doc = self._load_document()
        log.info("Document loaded. Tables: %d", len(doc.tables))

        questions: list[MultiChoiceQuestion] = []
        tables_used = 0

        for table_index, table in enumerate(doc.tables, start=1):
            rows = len(table.rows)
            log.debug("Table %d: rows=%d", table_index, rows)

            content_rows = [r for r in table.rows if self._row_has_any_content_fast(r)]
            if len(content_rows) < config.MIN_TABLE_ROWS:
                if self.log_small_tables:
                    self.logs.append(
                        f"Table {table_index}: fewer than {config.MIN_TABLE_ROWS} rows with content, skipped"
                    )
                continue

            tables_used += 1
            row_paragraphs = [self._row_paragraphs(r) for r in content_rows]
            questions.append(self._build_question(len(questions) + 1, row_paragraphs))

            if len(questions) % 25 == 0:
                log.info("Extracted questions so far: %d", len(questions))

        log.info("Tables used: %d / %d", tables_used, len(doc.tables))
        log.info("Total questions extracted: %d", len(questions))
        self.logs.append(f"Tables processed: {tables_used}")
        self.logs.append(f"Questions extracted: {len(questions)}")

        log.info("=== EXTRACT END ===")
        return questions
