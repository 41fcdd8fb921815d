import pytest

from wordbook_transfer.domain.columns import ColumnIndices, map_columns
from wordbook_transfer.domain.errors import MissingFieldError


def test_header_matching_ignores_case_whitespace_and_order():
    messy = map_columns(["Source", " Translation ", "NOTE"])
    clean = map_columns(["source", "translation", "note"])

    assert messy == clean == ColumnIndices(source=0, translation=1, chapter_name=None, note=2)


def test_header_positions_follow_column_order():
    columns = map_columns(
        ["note", "ignored", "Translation", "CHAPTER_NAME", "source"],
        require_chapter_column=True,
    )
    assert columns == ColumnIndices(source=4, translation=2, chapter_name=3, note=0)


def test_missing_chapter_header_fails_when_required():
    with pytest.raises(MissingFieldError) as excinfo:
        map_columns(["source", "translation"], require_chapter_column=True)
    assert excinfo.value.field == "chapter_name"


def test_chapter_header_is_optional_for_chapter_imports():
    columns = map_columns(["source", "translation"])
    assert columns.chapter_name is None
    assert columns.note is None


@pytest.mark.parametrize(
    ("header", "missing"),
    [
        (["translation", "note"], "source"),
        (["source", "note"], "translation"),
        ([], "source"),
    ],
)
def test_missing_source_or_translation_header_fails(header, missing):
    with pytest.raises(MissingFieldError) as excinfo:
        map_columns(header)
    assert excinfo.value.field == missing


def test_duplicate_header_last_occurrence_wins():
    columns = map_columns(["source", "translation", "source", None, 42])
    assert columns.source == 2
