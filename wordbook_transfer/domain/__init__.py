"""Domain model, error taxonomy and column mapping."""

from .columns import (
    CHAPTER_HEADERS,
    WORDBOOK_HEADERS,
    ColumnIndices,
    map_columns,
)
from .errors import (
    ExcelError,
    ExportError,
    InvalidDataError,
    InvalidFormatError,
    MissingFieldError,
    ParseError,
    TransferError,
    TransferIOError,
    XmlError,
)
from .models import Chapter, ChapterGrouper, Word, Wordbook

__all__ = [
    "CHAPTER_HEADERS",
    "Chapter",
    "ChapterGrouper",
    "ColumnIndices",
    "ExcelError",
    "ExportError",
    "InvalidDataError",
    "InvalidFormatError",
    "MissingFieldError",
    "ParseError",
    "TransferError",
    "TransferIOError",
    "WORDBOOK_HEADERS",
    "Word",
    "Wordbook",
    "XmlError",
    "map_columns",
]
