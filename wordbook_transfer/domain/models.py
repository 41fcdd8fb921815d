"""Format-neutral vocabulary model shared by every codec."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional


def _optional_text(value: object) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


@dataclass(frozen=True)
class Word:
    source: str
    translation: str
    note: Optional[str] = None

    @classmethod
    def create(
        cls,
        source: str,
        translation: str,
        note: Optional[str] = None,
    ) -> "Word":
        """Build a word, rejecting blank required fields and folding a blank note."""
        if not str(source or "").strip():
            raise ValueError("source must not be empty")
        if not str(translation or "").strip():
            raise ValueError("translation must not be empty")
        return cls(source=source, translation=translation, note=_optional_text(note))


@dataclass(frozen=True)
class Chapter:
    name: str
    words: tuple[Word, ...] = field(default_factory=tuple)

    @classmethod
    def create(cls, name: str, words: Iterable[Word] = ()) -> "Chapter":
        return cls(name=name, words=tuple(words))

    @property
    def word_count(self) -> int:
        return len(self.words)


@dataclass(frozen=True)
class Wordbook:
    name: str
    description: Optional[str] = None
    chapters: tuple[Chapter, ...] = field(default_factory=tuple)

    @classmethod
    def create(
        cls,
        name: str,
        description: Optional[str] = None,
        chapters: Iterable[Chapter] = (),
    ) -> "Wordbook":
        return cls(
            name=name,
            description=_optional_text(description),
            chapters=tuple(chapters),
        )

    @property
    def word_count(self) -> int:
        return sum(chapter.word_count for chapter in self.chapters)


class ChapterGrouper:
    """Collect words under chapter names, keeping first-seen chapter order.

    A chapter only exists once a word has been added under its name.
    """

    def __init__(self) -> None:
        self._words_by_name: dict[str, list[Word]] = {}

    def add(self, chapter_name: str, word: Word) -> None:
        self._words_by_name.setdefault(chapter_name, []).append(word)

    def chapters(self) -> tuple[Chapter, ...]:
        return tuple(
            Chapter.create(name, words) for name, words in self._words_by_name.items()
        )
