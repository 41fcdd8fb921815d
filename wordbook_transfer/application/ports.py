"""Application-level ports for the persistence collaborator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..domain.models import Chapter, Wordbook


@dataclass(frozen=True)
class ImportResult:
    chapters_created: int
    words_created: int


class WordbookNotFound(LookupError):
    pass


class ChapterNotFound(LookupError):
    pass


class VocabularyStore(Protocol):
    """Port abstraction for wordbook persistence.

    ``save_wordbook`` and ``save_chapter`` must store the whole model as one
    atomic unit: either every chapter and word becomes visible or none does.
    """

    def save_wordbook(self, wordbook: Wordbook) -> ImportResult: ...

    def save_chapter(self, wordbook_id: int, chapter: Chapter) -> ImportResult: ...

    def load_wordbook(self, wordbook_id: int) -> Wordbook: ...

    def load_chapter(self, wordbook_id: int, chapter_id: int) -> Chapter: ...
