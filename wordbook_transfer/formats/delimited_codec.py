"""Delimited text import (tab-separated) and CSV export.

Import and export use different conventions. Uploaded ``.csv``
and ``.tsv`` files are read as TAB-separated lines whose first line is an
ignored header. Exports are comma-separated with a fixed header and minimal
quoting.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional, Sequence

from ..domain.columns import CHAPTER_HEADERS, WORDBOOK_HEADERS
from ..domain.errors import InvalidDataError, InvalidFormatError
from ..domain.models import Chapter, ChapterGrouper, Word, Wordbook
from .base import CONTENT_TYPE_CSV, decode_utf8

logger = logging.getLogger(__name__)

IMPORT_DELIMITER = "\t"
EXPORT_DELIMITER = ","
LINE_TERMINATOR = "\n"
UTF8_BOM = "\ufeff"

MISSING_SOURCE_OR_TRANSLATION = "Missing source or translation"

_CHARS_REQUIRING_QUOTES = (",", '"', "\n")


def escape_csv_field(value: str) -> str:
    """Quote a field only when it contains a comma, a double quote or a newline."""
    if any(char in value for char in _CHARS_REQUIRING_QUOTES):
        return '"' + value.replace('"', '""') + '"'
    return value


def format_csv_row(values: Iterable[str]) -> str:
    return EXPORT_DELIMITER.join(escape_csv_field(value) for value in values)


class DelimitedCodec:
    format_name = "csv"
    extension = "csv"
    content_type = CONTENT_TYPE_CSV

    def __init__(self, *, write_bom: bool = False, logger_instance=None) -> None:
        self.write_bom = write_bom
        self.logger = logger_instance or logger

    def decode_wordbook(self, data: bytes, name: str) -> Wordbook:
        grouper = ChapterGrouper()
        skipped = 0
        for row, fields in self._data_rows(data):
            if len(fields) < 3:
                skipped += 1
                continue
            source, translation = _required_pair(row, fields[1], fields[2])
            grouper.add(
                fields[0].strip(),
                Word(source=source, translation=translation, note=_note(fields, 3)),
            )
        wordbook = Wordbook.create(name, None, grouper.chapters())
        self.logger.debug(
            "Decoded delimited wordbook %r: chapters=%s words=%s skipped_rows=%s",
            name,
            len(wordbook.chapters),
            wordbook.word_count,
            skipped,
        )
        return wordbook

    def decode_chapter(self, data: bytes, name: str) -> Chapter:
        words: list[Word] = []
        skipped = 0
        for row, fields in self._data_rows(data):
            if len(fields) < 2:
                skipped += 1
                continue
            source, translation = _required_pair(row, fields[0], fields[1])
            words.append(Word(source=source, translation=translation, note=_note(fields, 2)))
        self.logger.debug(
            "Decoded delimited chapter %r: words=%s skipped_rows=%s",
            name,
            len(words),
            skipped,
        )
        return Chapter.create(name, words)

    def encode_wordbook(self, wordbook: Wordbook) -> bytes:
        lines = [format_csv_row(WORDBOOK_HEADERS)]
        for chapter in wordbook.chapters:
            for word in chapter.words:
                lines.append(
                    format_csv_row(
                        [chapter.name, word.source, word.translation, word.note or ""]
                    )
                )
        return self._join(lines)

    def encode_chapter(self, chapter: Chapter) -> bytes:
        lines = [format_csv_row(CHAPTER_HEADERS)]
        for word in chapter.words:
            lines.append(format_csv_row([word.source, word.translation, word.note or ""]))
        return self._join(lines)

    def _data_rows(self, data: bytes) -> Iterator[tuple[int, list[str]]]:
        """Yield ``(row_number, fields)`` for every line after the header.

        Row numbers are 1-based and count the header, so the first data
        line is row 2.
        """
        lines = split_lines(decode_utf8(data, allow_bom=True))
        if not lines:
            raise InvalidFormatError("Empty file")
        for index, line in enumerate(lines[1:]):
            yield index + 2, line.split(IMPORT_DELIMITER)

    def _join(self, lines: Sequence[str]) -> bytes:
        text = "".join(f"{line}{LINE_TERMINATOR}" for line in lines)
        if self.write_bom:
            text = UTF8_BOM + text
        return text.encode("utf-8")


def split_lines(text: str) -> list[str]:
    """Split on ``\\n``, dropping a trailing ``\\r`` and the empty tail after a final newline."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _required_pair(row: int, raw_source: str, raw_translation: str) -> tuple[str, str]:
    source = raw_source.strip()
    translation = raw_translation.strip()
    if not source or not translation:
        raise InvalidDataError(row, MISSING_SOURCE_OR_TRANSLATION)
    return source, translation


def _note(fields: Sequence[str], index: int) -> Optional[str]:
    if index >= len(fields):
        return None
    return fields[index].strip() or None
