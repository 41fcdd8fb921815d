import threading

import pytest

from wordbook_transfer.application.ports import ChapterNotFound, ImportResult, WordbookNotFound
from wordbook_transfer.domain.models import Chapter, Word, Wordbook
from wordbook_transfer.storage.memory_store import InMemoryVocabularyStore


def test_save_and_load_wordbook_roundtrip(sample_wordbook):
    store = InMemoryVocabularyStore()

    result = store.save_wordbook(sample_wordbook)

    assert result == ImportResult(chapters_created=2, words_created=4)
    assert store.load_wordbook(1) == sample_wordbook


def test_ids_are_assigned_sequentially_across_wordbooks(sample_wordbook):
    store = InMemoryVocabularyStore()
    store.save_wordbook(sample_wordbook)
    store.save_wordbook(Wordbook.create("Second", None, [Chapter.create("Only")]))

    assert store.list_wordbooks() == [(1, "Français"), (2, "Second")]
    assert store.list_chapters(1) == [(1, "Animals"), (2, "Food")]
    assert store.list_chapters(2) == [(3, "Only")]


def test_save_chapter_appends_after_existing_chapters(sample_wordbook):
    store = InMemoryVocabularyStore()
    store.save_wordbook(sample_wordbook)

    result = store.save_chapter(1, Chapter.create("Verbs", [Word("run", "courir")]))

    assert result == ImportResult(chapters_created=1, words_created=1)
    assert [name for _, name in store.list_chapters(1)] == ["Animals", "Food", "Verbs"]
    assert store.load_chapter(1, 3).words == (Word("run", "courir"),)


def test_unknown_ids_raise_lookup_errors(sample_wordbook):
    store = InMemoryVocabularyStore()
    store.save_wordbook(sample_wordbook)

    with pytest.raises(WordbookNotFound):
        store.load_wordbook(7)
    with pytest.raises(WordbookNotFound):
        store.save_chapter(7, Chapter.create("x"))
    with pytest.raises(ChapterNotFound):
        store.load_chapter(1, 42)
    assert store.list_chapters(1) == [(1, "Animals"), (2, "Food")]


def test_concurrent_chapter_imports_are_all_kept():
    store = InMemoryVocabularyStore()
    store.save_wordbook(Wordbook.create("Shared"))

    threads = [
        threading.Thread(
            target=store.save_chapter,
            args=(1, Chapter.create(f"Chapter {index}", [Word("a", "b")])),
        )
        for index in range(20)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    chapters = store.list_chapters(1)
    assert len(chapters) == 20
    assert len({chapter_id for chapter_id, _ in chapters}) == 20
