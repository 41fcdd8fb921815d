"""Sample import files, one per format and target.

Every template is valid input for the codec that handles its format, so the
same files double as user documentation and as fixtures.
"""

from __future__ import annotations

import io
from typing import Callable

from openpyxl import Workbook

from ..domain.columns import CHAPTER_HEADERS, WORDBOOK_HEADERS
from ..domain.errors import ExportError, InvalidFormatError
from ..domain.models import Chapter, Word, Wordbook
from .delimited_codec import IMPORT_DELIMITER, LINE_TERMINATOR
from .json_codec import JsonCodec
from .spreadsheet_codec import write_row

TARGET_WORDBOOK = "wordbook"
TARGET_CHAPTER = "chapter"
TEMPLATE_TARGETS = (TARGET_WORDBOOK, TARGET_CHAPTER)
TEMPLATE_FORMATS = ("json", "xml", "xlsx", "csv")

SAMPLE_WORDBOOK_NAME = "wordbook_name"
SAMPLE_WORDBOOK_DESCRIPTION = "wordbook_description"
SAMPLE_CHAPTER_NAME = "chapter_name"
SAMPLE_CHAPTER_1 = "Chapter 1"
SAMPLE_CHAPTER_2 = "Chapter 2"
SAMPLE_SOURCE_1 = "source_text_1"
SAMPLE_SOURCE_2 = "source_text_2"
SAMPLE_SOURCE_3 = "source_text_3"
SAMPLE_TRANSLATION_1 = "translation_text_1"
SAMPLE_TRANSLATION_2 = "translation_text_2"
SAMPLE_TRANSLATION_3 = "translation_text_3"
SAMPLE_NOTE_1 = "note_1"
SAMPLE_NOTE_3 = "note_3"

XML_WORDBOOK_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<wordbook>
    <name>wordbook_name</name>
    <description>wordbook_description</description>
    <chapter>
        <name>chapter_name</name>
        <word>
            <source>source_text_1</source>
            <translation>translation_text_1</translation>
            <note>note_1</note>
        </word>
        <word>
            <source>source_text_2</source>
            <translation>translation_text_2</translation>
        </word>
    </chapter>
</wordbook>"""

XML_CHAPTER_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<chapter>
    <name>chapter_name</name>
    <word>
        <source>source_text_1</source>
        <translation>translation_text_1</translation>
        <note>note_1</note>
    </word>
    <word>
        <source>source_text_2</source>
        <translation>translation_text_2</translation>
    </word>
</chapter>"""

# (chapter, source, translation, note) rows shared by the tabular templates
_TABULAR_ROWS: tuple[tuple[str, str, str, str], ...] = (
    (SAMPLE_CHAPTER_1, SAMPLE_SOURCE_1, SAMPLE_TRANSLATION_1, SAMPLE_NOTE_1),
    (SAMPLE_CHAPTER_1, SAMPLE_SOURCE_2, SAMPLE_TRANSLATION_2, ""),
    (SAMPLE_CHAPTER_2, SAMPLE_SOURCE_3, SAMPLE_TRANSLATION_3, SAMPLE_NOTE_3),
)


def _sample_chapter() -> Chapter:
    return Chapter.create(
        SAMPLE_CHAPTER_NAME,
        [
            Word(SAMPLE_SOURCE_1, SAMPLE_TRANSLATION_1, SAMPLE_NOTE_1),
            Word(SAMPLE_SOURCE_2, SAMPLE_TRANSLATION_2),
        ],
    )


def _sample_wordbook() -> Wordbook:
    return Wordbook.create(
        SAMPLE_WORDBOOK_NAME,
        SAMPLE_WORDBOOK_DESCRIPTION,
        [_sample_chapter()],
    )


class TemplateGenerator:
    def __init__(self, json_codec: JsonCodec | None = None) -> None:
        self.json_codec = json_codec or JsonCodec()
        self._renderers: dict[tuple[str, str], Callable[[], bytes]] = {
            ("json", TARGET_WORDBOOK): self.json_wordbook_template,
            ("json", TARGET_CHAPTER): self.json_chapter_template,
            ("xml", TARGET_WORDBOOK): self.xml_wordbook_template,
            ("xml", TARGET_CHAPTER): self.xml_chapter_template,
            ("xlsx", TARGET_WORDBOOK): self.xlsx_wordbook_template,
            ("xlsx", TARGET_CHAPTER): self.xlsx_chapter_template,
            ("csv", TARGET_WORDBOOK): self.csv_wordbook_template,
            ("csv", TARGET_CHAPTER): self.csv_chapter_template,
        }

    def render(self, file_format: str, target: str) -> bytes:
        key = (str(file_format or "").strip().lower(), str(target or "").strip().lower())
        renderer = self._renderers.get(key)
        if renderer is None:
            raise InvalidFormatError(f"Invalid format or target: {file_format}/{target}")
        return renderer()

    def json_wordbook_template(self) -> bytes:
        return self.json_codec.encode_wordbook(_sample_wordbook())

    def json_chapter_template(self) -> bytes:
        return self.json_codec.encode_chapter(_sample_chapter())

    def xml_wordbook_template(self) -> bytes:
        return XML_WORDBOOK_TEMPLATE.encode("utf-8")

    def xml_chapter_template(self) -> bytes:
        return XML_CHAPTER_TEMPLATE.encode("utf-8")

    def csv_wordbook_template(self) -> bytes:
        lines = [IMPORT_DELIMITER.join(WORDBOOK_HEADERS)]
        lines.extend(IMPORT_DELIMITER.join(row) for row in _TABULAR_ROWS)
        return "".join(f"{line}{LINE_TERMINATOR}" for line in lines).encode("utf-8")

    def csv_chapter_template(self) -> bytes:
        lines = [IMPORT_DELIMITER.join(CHAPTER_HEADERS)]
        lines.extend(IMPORT_DELIMITER.join(row[1:]) for row in _TABULAR_ROWS[:2])
        return "".join(f"{line}{LINE_TERMINATOR}" for line in lines).encode("utf-8")

    def xlsx_wordbook_template(self) -> bytes:
        return self._xlsx(
            WORDBOOK_HEADERS,
            [list(row) for row in _TABULAR_ROWS],
        )

    def xlsx_chapter_template(self) -> bytes:
        return self._xlsx(
            CHAPTER_HEADERS,
            [list(row[1:]) for row in _TABULAR_ROWS[:2]],
        )

    def _xlsx(self, headers, rows: list[list[str]]) -> bytes:
        workbook = Workbook()
        worksheet = workbook.active
        write_row(worksheet, 1, headers)
        for row_index, values in enumerate(rows, start=2):
            write_row(worksheet, row_index, [value or None for value in values])
        buffer = io.BytesIO()
        try:
            workbook.save(buffer)
        except Exception as exc:
            raise ExportError(f"Failed to write spreadsheet template: {exc}") from exc
        return buffer.getvalue()
