import json

import pytest

from wordbook_transfer.domain.errors import ParseError
from wordbook_transfer.domain.models import Chapter, Word
from wordbook_transfer.formats.json_codec import JsonCodec


def test_json_chapter_scenario_decodes_with_absent_note():
    codec = JsonCodec()
    chapter = codec.decode_chapter(
        b'{"name":"Animals","words":[{"source":"cat","translation":"chat"}]}', "ignored"
    )

    assert chapter == Chapter.create("Animals", [Word("cat", "chat")])
    assert chapter.words[0].note is None


def test_json_wordbook_roundtrip_preserves_content(sample_wordbook):
    codec = JsonCodec()
    assert codec.decode_wordbook(codec.encode_wordbook(sample_wordbook)) == sample_wordbook


def test_json_chapter_roundtrip_preserves_content(sample_chapter):
    codec = JsonCodec()
    assert codec.decode_chapter(codec.encode_chapter(sample_chapter), "") == sample_chapter


def test_json_encode_omits_empty_optionals_and_keeps_field_order():
    codec = JsonCodec()
    chapter = Chapter.create("Animals", [Word("cat", "chat")])
    payload = codec.encode_chapter(chapter).decode("utf-8")

    assert "null" not in payload
    assert "note" not in payload
    assert list(json.loads(payload)) == ["name", "words"]
    assert payload.startswith('{\n  "name": "Animals"')


def test_json_encode_writes_unicode_unescaped(sample_wordbook):
    payload = JsonCodec().encode_wordbook(sample_wordbook).decode("utf-8")
    assert '"name": "Français"' in payload
    assert list(json.loads(payload)) == ["name", "description", "chapters"]


def test_json_wordbook_optional_sections_may_be_missing_or_null():
    codec = JsonCodec()
    wordbook = codec.decode_wordbook(
        b'{"name": "Empty", "description": null, "extra": 1, '
        b'"chapters": [{"name": "Only name"}]}'
    )
    assert wordbook.description is None
    assert wordbook.chapters == (Chapter.create("Only name"),)


def test_json_decode_rejects_invalid_documents():
    codec = JsonCodec()

    with pytest.raises(ParseError, match="line 1"):
        codec.decode_wordbook(b"{ invalid")
    with pytest.raises(ParseError, match="expected an object"):
        codec.decode_wordbook(b"[]")
    with pytest.raises(ParseError, match="name: missing field"):
        codec.decode_chapter(b'{"words": []}', "")
    with pytest.raises(ParseError, match=r"chapters\[0\]\.words\[0\]\.translation: missing field"):
        codec.decode_wordbook(
            b'{"name": "B", "chapters": [{"name": "C", "words": [{"source": "x"}]}]}'
        )
    with pytest.raises(ParseError, match=r"words\[0\]\.source: expected a string"):
        codec.decode_chapter(b'{"name": "C", "words": [{"source": 1, "translation": "y"}]}', "")
    with pytest.raises(ParseError, match="chapters: expected an array"):
        codec.decode_wordbook(b'{"name": "B", "chapters": {}}')


def test_json_decode_rejects_blank_required_values_and_bad_utf8():
    codec = JsonCodec()

    with pytest.raises(ParseError, match="must not be empty"):
        codec.decode_chapter(b'{"name": "C", "words": [{"source": " ", "translation": "y"}]}', "")
    with pytest.raises(ParseError):
        codec.decode_chapter(b'{"name": "\xff"}', "")


def test_json_decode_wraps_nesting_and_number_limits():
    codec = JsonCodec()

    with pytest.raises(ParseError, match="nested too deeply"):
        codec.decode_chapter(b"[" * 200000, "")
    with pytest.raises(ParseError):
        codec.decode_chapter(b'{"name": ' + b"1" * 5000 + b"}", "")


def test_json_blank_note_decodes_as_absent():
    chapter = JsonCodec().decode_chapter(
        b'{"name": "C", "words": [{"source": "a", "translation": "b", "note": "  "}]}', ""
    )
    assert chapter.words[0].note is None
