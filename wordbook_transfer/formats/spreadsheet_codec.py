"""Spreadsheet (xlsx) import and export backed by openpyxl."""

from __future__ import annotations

import io
import logging
import re
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Iterator, Optional, Sequence

from openpyxl import Workbook, load_workbook

from ..domain.columns import (
    CHAPTER_HEADERS,
    WORDBOOK_HEADERS,
    ColumnIndices,
    map_columns,
)
from ..domain.errors import ExcelError, ExportError, InvalidDataError, InvalidFormatError
from ..domain.models import Chapter, ChapterGrouper, Word, Wordbook
from .base import CONTENT_TYPE_XLSX

logger = logging.getLogger(__name__)

DEFAULT_SHEET_TITLE = "Sheet1"
MAX_SHEET_TITLE_LENGTH = 31

_INVALID_SHEET_TITLE_RE = re.compile(r"[\\/*?:\[\]]")


def cell_to_text(value: Any) -> Optional[str]:
    """Render any cell value as trimmed text, or ``None`` when it is empty."""
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return str(value)
    return str(value).strip() or None


def sheet_title(name: str) -> str:
    title = _INVALID_SHEET_TITLE_RE.sub("_", str(name or "")).strip()
    # Excel rejects titles that start or end with an apostrophe
    title = title.strip("'")
    return title[:MAX_SHEET_TITLE_LENGTH] or DEFAULT_SHEET_TITLE


class SpreadsheetCodec:
    format_name = "xlsx"
    extension = "xlsx"
    content_type = CONTENT_TYPE_XLSX

    def __init__(self, *, logger_instance=None) -> None:
        self.logger = logger_instance or logger

    def decode_wordbook(self, data: bytes, name: str) -> Wordbook:
        header, rows = self._read_first_sheet(data)
        columns = map_columns(header, require_chapter_column=True)
        grouper = ChapterGrouper()
        for row_number, row in rows:
            chapter_name = _cell(row, columns.chapter_name)
            if chapter_name is None:
                raise InvalidDataError(row_number, "Missing chapter_name")
            grouper.add(chapter_name, _row_word(row_number, row, columns))
        wordbook = Wordbook.create(name, None, grouper.chapters())
        self.logger.debug(
            "Decoded spreadsheet wordbook %r: chapters=%s words=%s",
            name,
            len(wordbook.chapters),
            wordbook.word_count,
        )
        return wordbook

    def decode_chapter(self, data: bytes, name: str) -> Chapter:
        header, rows = self._read_first_sheet(data)
        columns = map_columns(header, require_chapter_column=False)
        chapter = Chapter.create(
            name,
            [_row_word(row_number, row, columns) for row_number, row in rows],
        )
        self.logger.debug("Decoded spreadsheet chapter %r: words=%s", name, chapter.word_count)
        return chapter

    def encode_wordbook(self, wordbook: Wordbook) -> bytes:
        rows = (
            [chapter.name, word.source, word.translation, word.note]
            for chapter in wordbook.chapters
            for word in chapter.words
        )
        return self._write(wordbook.name, WORDBOOK_HEADERS, rows)

    def encode_chapter(self, chapter: Chapter) -> bytes:
        rows = ([word.source, word.translation, word.note] for word in chapter.words)
        return self._write(chapter.name, CHAPTER_HEADERS, rows)

    def _read_first_sheet(
        self, data: bytes
    ) -> tuple[Sequence[Any], Iterator[tuple[int, Sequence[Any]]]]:
        try:
            workbook = load_workbook(io.BytesIO(bytes(data)), data_only=True)
        except Exception as exc:
            raise ExcelError(str(exc) or exc.__class__.__name__) from exc

        if not workbook.worksheets:
            raise InvalidFormatError("No sheets found")
        rows = _used_rows(workbook.worksheets[0])
        if not rows:
            raise InvalidFormatError("Empty sheet")
        return rows[0], ((index + 2, row) for index, row in enumerate(rows[1:]))

    def _write(
        self,
        title: str,
        headers: Sequence[str],
        rows: Iterable[Sequence[Any]],
    ) -> bytes:
        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = sheet_title(title)
        buffer = io.BytesIO()
        try:
            write_row(worksheet, 1, headers)
            for row_index, row_values in enumerate(rows, start=2):
                write_row(worksheet, row_index, row_values)
            workbook.save(buffer)
        except Exception as exc:
            raise ExportError(f"Failed to write spreadsheet: {exc}") from exc
        return buffer.getvalue()


def write_row(worksheet, row_index: int, values: Sequence[Optional[str]]) -> None:
    """Write plain text cells; ``None`` leaves the cell empty."""
    for column_index, value in enumerate(values, start=1):
        if value is None:
            continue
        cell = worksheet.cell(row=row_index, column=column_index, value=value)
        # openpyxl turns "=..." strings into formulas
        cell.data_type = "s"


def _used_rows(worksheet) -> list[tuple[Any, ...]]:
    """Return cell values up to the last row holding a value.

    Styled but empty rows at the end of a sheet still count towards
    ``max_row``; they are dropped here. Error cells (``#N/A``) read as empty.
    """
    rows = [
        tuple(None if cell.data_type == "e" else cell.value for cell in row)
        for row in worksheet.iter_rows()
    ]
    while rows and all(value is None for value in rows[-1]):
        rows.pop()
    return rows


def _cell(row: Sequence[Any], index: Optional[int]) -> Optional[str]:
    if index is None or index >= len(row):
        return None
    return cell_to_text(row[index])


def _row_word(row_number: int, row: Sequence[Any], columns: ColumnIndices) -> Word:
    source = _cell(row, columns.source)
    if source is None:
        raise InvalidDataError(row_number, "Missing source")
    translation = _cell(row, columns.translation)
    if translation is None:
        raise InvalidDataError(row_number, "Missing translation")
    return Word(source=source, translation=translation, note=_cell(row, columns.note))
