"""In-process vocabulary store with all-or-nothing imports."""

from __future__ import annotations

import copy
import logging
import threading
from dataclasses import dataclass, field
from typing import Optional

from ..application.ports import ChapterNotFound, ImportResult, WordbookNotFound
from ..domain.models import Chapter, Word, Wordbook

logger = logging.getLogger(__name__)


@dataclass
class _StoredChapter:
    id: int
    name: str
    sort_order: int
    words: list[Word] = field(default_factory=list)


@dataclass
class _StoredWordbook:
    id: int
    name: str
    description: Optional[str]
    sort_order: int
    chapters: list[_StoredChapter] = field(default_factory=list)


class InMemoryVocabularyStore:
    """Keeps wordbooks in memory, mirroring the row layout of a relational store.

    Imports are staged on private copies and published in a single
    assignment, so readers never observe a partially imported wordbook.
    """

    def __init__(self, logger_instance=None) -> None:
        self.logger = logger_instance or logger
        self._lock = threading.Lock()
        self._wordbooks: dict[int, _StoredWordbook] = {}
        self._next_wordbook_id = 1
        self._next_chapter_id = 1

    def save_wordbook(self, wordbook: Wordbook) -> ImportResult:
        with self._lock:
            next_chapter_id = self._next_chapter_id
            sort_order = max(
                (stored.sort_order + 1 for stored in self._wordbooks.values()),
                default=0,
            )
            staged = _StoredWordbook(
                id=self._next_wordbook_id,
                name=wordbook.name,
                description=wordbook.description,
                sort_order=sort_order,
            )
            for chapter_index, chapter in enumerate(wordbook.chapters):
                staged.chapters.append(
                    _StoredChapter(
                        id=next_chapter_id,
                        name=chapter.name,
                        sort_order=chapter_index,
                        words=list(chapter.words),
                    )
                )
                next_chapter_id += 1

            self._wordbooks[staged.id] = staged
            self._next_wordbook_id = staged.id + 1
            self._next_chapter_id = next_chapter_id
        self.logger.debug("Stored wordbook id=%s name=%r", staged.id, staged.name)
        return ImportResult(
            chapters_created=len(staged.chapters),
            words_created=wordbook.word_count,
        )

    def save_chapter(self, wordbook_id: int, chapter: Chapter) -> ImportResult:
        with self._lock:
            current = self._get_wordbook_locked(wordbook_id)
            staged = copy.copy(current)
            staged.chapters = list(current.chapters)
            sort_order = max((stored.sort_order + 1 for stored in staged.chapters), default=0)
            stored_chapter = _StoredChapter(
                id=self._next_chapter_id,
                name=chapter.name,
                sort_order=sort_order,
                words=list(chapter.words),
            )
            staged.chapters.append(stored_chapter)

            self._wordbooks[wordbook_id] = staged
            self._next_chapter_id += 1
        self.logger.debug(
            "Stored chapter id=%s name=%r in wordbook %s",
            stored_chapter.id,
            stored_chapter.name,
            wordbook_id,
        )
        return ImportResult(chapters_created=1, words_created=chapter.word_count)

    def load_wordbook(self, wordbook_id: int) -> Wordbook:
        with self._lock:
            stored = self._get_wordbook_locked(wordbook_id)
            return Wordbook.create(
                stored.name,
                stored.description,
                [_to_chapter(chapter) for chapter in _ordered(stored.chapters)],
            )

    def load_chapter(self, wordbook_id: int, chapter_id: int) -> Chapter:
        with self._lock:
            stored = self._get_wordbook_locked(wordbook_id)
            for chapter in stored.chapters:
                if chapter.id == chapter_id:
                    return _to_chapter(chapter)
        raise ChapterNotFound(f"Chapter not found: {chapter_id}")

    def list_wordbooks(self) -> list[tuple[int, str]]:
        with self._lock:
            ordered = sorted(self._wordbooks.values(), key=lambda item: item.sort_order)
            return [(stored.id, stored.name) for stored in ordered]

    def list_chapters(self, wordbook_id: int) -> list[tuple[int, str]]:
        with self._lock:
            stored = self._get_wordbook_locked(wordbook_id)
            return [(chapter.id, chapter.name) for chapter in _ordered(stored.chapters)]

    def _get_wordbook_locked(self, wordbook_id: int) -> _StoredWordbook:
        stored = self._wordbooks.get(wordbook_id)
        if stored is None:
            raise WordbookNotFound(f"Wordbook not found: {wordbook_id}")
        return stored


def _ordered(chapters: list[_StoredChapter]) -> list[_StoredChapter]:
    return sorted(chapters, key=lambda item: item.sort_order)


def _to_chapter(stored: _StoredChapter) -> Chapter:
    return Chapter.create(stored.name, stored.words)
