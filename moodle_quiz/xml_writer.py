"""Incremental Moodle XML writer.

Thin layer over ``lxml.etree.xmlfile`` that every model object writes itself
into. Each scope gets exactly one start and one end tag. The end tag is
written even when the body raises, so a failed serialization leaves a
truncated but well-formed document.

``xmlfile`` does not indent, the writer adds the whitespace itself.
Serializer and sink failures surface as ``WriterError``.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from os import PathLike
from typing import IO, Iterator, Mapping, Union

from lxml import etree

from moodle_quiz import config
from moodle_quiz.errors import QuizError, WriterError
from moodle_quiz.models.text_format import TextFormat

log = logging.getLogger(__name__)

Target = Union[str, "PathLike[str]", IO[bytes]]

# lxml reports unencodable strings (control characters, NUL) as ValueError
_WRITE_ERRORS = (etree.LxmlError, ValueError, OSError)

CDATA_END = "]]>"


class _GuardedSink:
    """Binary sink wrapper that remembers the first failure of ``write``.

    ``xmlfile`` does not always propagate exceptions raised by a file object.
    """

    def __init__(self, sink: IO[bytes]):
        self._sink = sink
        self.error: BaseException | None = None

    def write(self, data: bytes) -> int:
        if self.error is not None:
            raise self.error
        try:
            return self._sink.write(data)
        except Exception as exc:
            self.error = exc
            raise


class QuizXmlWriter:
    def __init__(self, xf: etree.xmlfile, indent: int | None = None):
        self._xf = xf
        self._indent = config.INDENT if indent is None else indent
        # one flag per open scope: True once it holds a child element
        self._open: list[bool] = []

    @classmethod
    @contextmanager
    def open(
        cls,
        target: Target,
        *,
        encoding: str | None = None,
        indent: int | None = None,
        xml_declaration: bool | None = None,
    ) -> Iterator["QuizXmlWriter"]:
        """Open a writer on a path or on a binary file object.

        The caller owns ``target``; a file object is neither closed nor
        rewound.
        """
        encoding = encoding or config.ENCODING
        if xml_declaration is None:
            xml_declaration = config.XML_DECLARATION
        sink = None if isinstance(target, (str, PathLike)) else _GuardedSink(target)
        try:
            with etree.xmlfile(sink or target, encoding=encoding) as xf:
                if xml_declaration:
                    xf.write_declaration()
                yield cls(xf, indent)
        except QuizError:
            raise
        except _WRITE_ERRORS as exc:
            original = sink.error if sink is not None and sink.error else exc
            raise WriterError(
                f"Failed to write XML output: {original}", original
            ) from original
        if sink is not None and sink.error is not None:
            raise WriterError(
                f"Failed to write XML output: {sink.error}", sink.error
            ) from sink.error

    @property
    def depth(self) -> int:
        """Number of scopes currently open."""
        return len(self._open)

    def _newline(self, level: int) -> None:
        if self._indent:
            self._xf.write("\n" + " " * (self._indent * level))

    def _enter_child(self) -> None:
        if self._open:
            self._open[-1] = True
            self._newline(len(self._open))

    @contextmanager
    def scope(
        self,
        name: str,
        attrib: Mapping[str, str] | None = None,
        text_format: TextFormat | None = None,
    ) -> Iterator["QuizXmlWriter"]:
        """Write ``<name attrib...>``, run the body, then ``</name>``.

        ``text_format`` adds a trailing ``format`` attribute.
        """
        attributes = dict(attrib or {})
        if text_format is not None:
            attributes["format"] = TextFormat(text_format).attribute
        try:
            self._enter_child()
            with self._xf.element(name, attributes):
                self._open.append(False)
                try:
                    yield self
                finally:
                    if self._open.pop():
                        self._newline(len(self._open))
        except QuizError:
            raise
        except _WRITE_ERRORS as exc:
            raise WriterError(f"Failed to write <{name}>: {exc}", exc) from exc

    def characters(self, data: str) -> None:
        """Write escaped character data into the current scope."""
        try:
            self._xf.write(data)
        except _WRITE_ERRORS as exc:
            raise WriterError(f"Failed to write text: {exc}", exc) from exc

    def text_tag(self, data: str, cdata: bool = False) -> None:
        """Write a ``<text>`` child, either escaped or wrapped in CDATA."""
        if not cdata:
            with self.scope("text"):
                self.characters(data)
            return

        if CDATA_END in data:
            # a CDATA section cannot hold its own terminator
            log.debug("Text contains %r, writing it escaped instead of CDATA", CDATA_END)
            self.text_tag(data, cdata=False)
            return

        try:
            element = etree.Element("text")
            element.text = etree.CDATA(data)
            self._enter_child()
            self._xf.write(element)
        except _WRITE_ERRORS as exc:
            raise WriterError(f"Failed to write CDATA text: {exc}", exc) from exc

    def value_tag(self, name: str, value: str) -> None:
        """Write ``<name>value</name>`` with no format attribute."""
        with self.scope(name):
            self.characters(value)

    def formatted_text(
        self,
        name: str,
        data: str,
        text_format: TextFormat = TextFormat.HTML,
        cdata: bool = False,
    ) -> None:
        """Write ``<name format="..."><text>data</text></name>``."""
        with self.scope(name, text_format=text_format):
            self.text_tag(data, cdata=cdata)


def bool_word(value: bool) -> str:
    return "true" if value else "false"


def bool_digit(value: bool) -> str:
    return "1" if value else "0"
