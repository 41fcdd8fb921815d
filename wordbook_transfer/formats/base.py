"""Codec capability shared by every file format."""

from __future__ import annotations

from typing import Protocol

from ..domain.errors import ParseError
from ..domain.models import Chapter, Wordbook

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_XML = "application/xml"
CONTENT_TYPE_CSV = "text/csv; charset=utf-8"
CONTENT_TYPE_XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class WordbookCodec(Protocol):
    """Decode bytes into the vocabulary model and encode it back.

    ``name`` is only consulted by formats whose files do not carry their own
    wordbook or chapter name (delimited text and spreadsheets).
    """

    format_name: str
    extension: str
    content_type: str

    def decode_wordbook(self, data: bytes, name: str) -> Wordbook: ...

    def decode_chapter(self, data: bytes, name: str) -> Chapter: ...

    def encode_wordbook(self, wordbook: Wordbook) -> bytes: ...

    def encode_chapter(self, chapter: Chapter) -> bytes: ...


def decode_utf8(data: bytes, *, allow_bom: bool = False) -> str:
    encoding = "utf-8-sig" if allow_bom else "utf-8"
    try:
        return bytes(data).decode(encoding)
    except UnicodeDecodeError as exc:
        raise ParseError(str(exc)) from exc
