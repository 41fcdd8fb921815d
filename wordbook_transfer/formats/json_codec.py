"""JSON import and export."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from ..domain.errors import ParseError
from ..domain.models import Chapter, Word, Wordbook
from .base import CONTENT_TYPE_JSON, decode_utf8

logger = logging.getLogger(__name__)


class JsonCodec:
    format_name = "json"
    extension = "json"
    content_type = CONTENT_TYPE_JSON

    def __init__(self, *, indent: int = 2, logger_instance=None) -> None:
        self.indent = indent
        self.logger = logger_instance or logger

    def decode_wordbook(self, data: bytes, name: str = "") -> Wordbook:
        wordbook = _wordbook_from_payload(self._load(data))
        self.logger.debug(
            "Decoded JSON wordbook %r: chapters=%s words=%s",
            wordbook.name,
            len(wordbook.chapters),
            wordbook.word_count,
        )
        return wordbook

    def decode_chapter(self, data: bytes, name: str = "") -> Chapter:
        chapter = _chapter_from_payload(self._load(data), "$")
        self.logger.debug("Decoded JSON chapter %r: words=%s", chapter.name, chapter.word_count)
        return chapter

    def encode_wordbook(self, wordbook: Wordbook) -> bytes:
        return self._dump(wordbook_to_payload(wordbook))

    def encode_chapter(self, chapter: Chapter) -> bytes:
        return self._dump(chapter_to_payload(chapter))

    def _load(self, data: bytes) -> Any:
        text = decode_utf8(data)
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParseError(
                f"{exc.msg} at line {exc.lineno} column {exc.colno}"
            ) from exc
        except RecursionError as exc:
            raise ParseError("document is nested too deeply") from exc
        except ValueError as exc:
            # e.g. integer literals beyond the interpreter's digit limit
            raise ParseError(str(exc)) from exc

    def _dump(self, payload: dict[str, Any]) -> bytes:
        return json.dumps(payload, ensure_ascii=False, indent=self.indent).encode("utf-8")


def wordbook_to_payload(wordbook: Wordbook) -> dict[str, Any]:
    payload: dict[str, Any] = {"name": wordbook.name}
    if wordbook.description is not None:
        payload["description"] = wordbook.description
    payload["chapters"] = [chapter_to_payload(chapter) for chapter in wordbook.chapters]
    return payload


def chapter_to_payload(chapter: Chapter) -> dict[str, Any]:
    return {
        "name": chapter.name,
        "words": [_word_to_payload(word) for word in chapter.words],
    }


def _word_to_payload(word: Word) -> dict[str, str]:
    payload = {"source": word.source, "translation": word.translation}
    if word.note is not None:
        payload["note"] = word.note
    return payload


def _wordbook_from_payload(payload: Any) -> Wordbook:
    mapping = _expect_object(payload, "$")
    chapters = _optional_list(mapping, "chapters", "$")
    return Wordbook.create(
        name=_required_text(mapping, "name", "$"),
        description=_optional_text(mapping, "description", "$"),
        chapters=[
            _chapter_from_payload(item, f"chapters[{index}]")
            for index, item in enumerate(chapters)
        ],
    )


def _chapter_from_payload(payload: Any, path: str) -> Chapter:
    mapping = _expect_object(payload, path)
    words = _optional_list(mapping, "words", path)
    return Chapter.create(
        name=_required_text(mapping, "name", path),
        words=[
            _word_from_payload(item, _join(path, f"words[{index}]"))
            for index, item in enumerate(words)
        ],
    )


def _word_from_payload(payload: Any, path: str) -> Word:
    mapping = _expect_object(payload, path)
    source = _required_text(mapping, "source", path)
    translation = _required_text(mapping, "translation", path)
    if not source.strip():
        raise ParseError(f"{_join(path, 'source')}: must not be empty")
    if not translation.strip():
        raise ParseError(f"{_join(path, 'translation')}: must not be empty")
    return Word.create(source, translation, _optional_text(mapping, "note", path))


def _join(path: str, key: str) -> str:
    return key if path == "$" else f"{path}.{key}"


def _expect_object(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ParseError(f"{path}: expected an object, found {_type_name(value)}")
    return value


def _required_text(mapping: dict[str, Any], key: str, path: str) -> str:
    if key not in mapping:
        raise ParseError(f"{_join(path, key)}: missing field")
    value = mapping[key]
    if not isinstance(value, str):
        raise ParseError(f"{_join(path, key)}: expected a string, found {_type_name(value)}")
    return value


def _optional_text(mapping: dict[str, Any], key: str, path: str) -> Optional[str]:
    value = mapping.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ParseError(f"{_join(path, key)}: expected a string, found {_type_name(value)}")
    return value


def _optional_list(mapping: dict[str, Any], key: str, path: str) -> list[Any]:
    value = mapping.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ParseError(f"{_join(path, key)}: expected an array, found {_type_name(value)}")
    return value


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"
