import dataclasses

import pytest

from wordbook_transfer.domain.models import Chapter, ChapterGrouper, Word, Wordbook


def test_word_create_folds_blank_note_and_rejects_blank_fields():
    assert Word.create("cat", "chat", "   ").note is None
    assert Word.create("cat", "chat", "").note is None
    assert Word.create("cat", "chat", "pet").note == "pet"

    with pytest.raises(ValueError, match="source"):
        Word.create("  ", "chat")
    with pytest.raises(ValueError, match="translation"):
        Word.create("cat", "")


def test_models_are_immutable_and_freeze_sequences():
    words = [Word("cat", "chat")]
    chapter = Chapter.create("Animals", words)
    words.append(Word("dog", "chien"))

    assert chapter.words == (Word("cat", "chat"),)
    with pytest.raises(dataclasses.FrozenInstanceError):
        chapter.name = "Other"  # type: ignore[misc]


def test_wordbook_create_counts_words_and_drops_blank_description():
    wordbook = Wordbook.create(
        "Book",
        " ",
        [Chapter.create("A", [Word("a", "b")]), Chapter.create("B", [Word("c", "d"), Word("e", "f")])],
    )
    assert wordbook.description is None
    assert wordbook.word_count == 3
    assert wordbook.chapters[1].word_count == 2


def test_chapter_grouper_keeps_first_seen_order():
    grouper = ChapterGrouper()
    grouper.add("Zebra", Word("z1", "t1"))
    grouper.add("Alpha", Word("a1", "t2"))
    grouper.add("Zebra", Word("z2", "t3"))

    chapters = grouper.chapters()
    assert [chapter.name for chapter in chapters] == ["Zebra", "Alpha"]
    assert [word.source for word in chapters[0].words] == ["z1", "z2"]


def test_chapter_grouper_without_words_yields_no_chapters():
    assert ChapterGrouper().chapters() == ()
