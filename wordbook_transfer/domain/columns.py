"""Header-name to column-position resolution for tabular imports."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .errors import MissingFieldError

HEADER_CHAPTER_NAME = "chapter_name"
HEADER_SOURCE = "source"
HEADER_TRANSLATION = "translation"
HEADER_NOTE = "note"

WORDBOOK_HEADERS: tuple[str, ...] = (
    HEADER_CHAPTER_NAME,
    HEADER_SOURCE,
    HEADER_TRANSLATION,
    HEADER_NOTE,
)
CHAPTER_HEADERS: tuple[str, ...] = (HEADER_SOURCE, HEADER_TRANSLATION, HEADER_NOTE)


@dataclass(frozen=True)
class ColumnIndices:
    source: int
    translation: int
    chapter_name: Optional[int] = None
    note: Optional[int] = None


def normalize_header(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


def map_columns(
    header_cells: Iterable[object],
    *,
    require_chapter_column: bool = False,
) -> ColumnIndices:
    """Resolve known header names to their column positions.

    Matching ignores surrounding whitespace, case and column order; when a
    name repeats, its last occurrence wins. ``source`` and ``translation``
    must both be present, ``chapter_name`` only when
    ``require_chapter_column`` is set.
    """
    positions: dict[str, int] = {}
    for index, cell in enumerate(header_cells):
        name = normalize_header(cell)
        if name in WORDBOOK_HEADERS:
            positions[name] = index

    if require_chapter_column and HEADER_CHAPTER_NAME not in positions:
        raise MissingFieldError(HEADER_CHAPTER_NAME)
    for required in (HEADER_SOURCE, HEADER_TRANSLATION):
        if required not in positions:
            raise MissingFieldError(required)

    return ColumnIndices(
        source=positions[HEADER_SOURCE],
        translation=positions[HEADER_TRANSLATION],
        chapter_name=positions.get(HEADER_CHAPTER_NAME),
        note=positions.get(HEADER_NOTE),
    )
