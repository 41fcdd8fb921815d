"""XML import and export.

Documents are read into a small XML-shaped tree first and then copied
field-for-field into the vocabulary model::

    <wordbook>
        <name/> <description/>?
        <chapter>*
            <name/>
            <word>* <source/> <translation/> <note/>? </word>
        </chapter>
    </wordbook>

A chapter-only document uses ``<chapter>`` as its root element.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Optional

from ..domain.errors import XmlError
from ..domain.models import Chapter, Word, Wordbook
from .base import CONTENT_TYPE_XML, decode_utf8

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
TAG_WORDBOOK = "wordbook"
TAG_CHAPTER = "chapter"
TAG_WORD = "word"


@dataclass(frozen=True)
class XmlWord:
    source: str
    translation: str
    note: Optional[str] = None

    def to_word(self) -> Word:
        return Word.create(self.source, self.translation, self.note)


@dataclass(frozen=True)
class XmlChapter:
    name: str
    words: list[XmlWord] = field(default_factory=list)

    def to_chapter(self) -> Chapter:
        return Chapter.create(self.name, [word.to_word() for word in self.words])


@dataclass(frozen=True)
class XmlWordbook:
    name: str
    description: Optional[str] = None
    chapters: list[XmlChapter] = field(default_factory=list)

    def to_wordbook(self) -> Wordbook:
        return Wordbook.create(
            self.name,
            self.description,
            [chapter.to_chapter() for chapter in self.chapters],
        )


class XmlCodec:
    format_name = "xml"
    extension = "xml"
    content_type = CONTENT_TYPE_XML

    def __init__(self, *, indent: str = "    ", logger_instance=None) -> None:
        self.indent = indent
        self.logger = logger_instance or logger

    def decode_wordbook(self, data: bytes, name: str = "") -> Wordbook:
        root = self._parse(data, TAG_WORDBOOK)
        wordbook = _read_wordbook(root).to_wordbook()
        self.logger.debug(
            "Decoded XML wordbook %r: chapters=%s words=%s",
            wordbook.name,
            len(wordbook.chapters),
            wordbook.word_count,
        )
        return wordbook

    def decode_chapter(self, data: bytes, name: str = "") -> Chapter:
        root = self._parse(data, TAG_CHAPTER)
        chapter = _read_chapter(root).to_chapter()
        self.logger.debug("Decoded XML chapter %r: words=%s", chapter.name, chapter.word_count)
        return chapter

    def encode_wordbook(self, wordbook: Wordbook) -> bytes:
        root = ET.Element(TAG_WORDBOOK)
        _append_text(root, "name", wordbook.name)
        if wordbook.description is not None:
            _append_text(root, "description", wordbook.description)
        for chapter in wordbook.chapters:
            root.append(_chapter_element(chapter))
        return self._serialize(root)

    def encode_chapter(self, chapter: Chapter) -> bytes:
        return self._serialize(_chapter_element(chapter))

    def _parse(self, data: bytes, expected_root: str) -> ET.Element:
        text = decode_utf8(data)
        try:
            root = ET.fromstring(text)
        except ET.ParseError as exc:
            raise XmlError(str(exc)) from exc
        if root.tag != expected_root:
            raise XmlError(f"expected root element <{expected_root}>, found <{root.tag}>")
        return root

    def _serialize(self, root: ET.Element) -> bytes:
        if self.indent:
            ET.indent(root, space=self.indent)
        body = ET.tostring(root, encoding="unicode")
        return f"{XML_DECLARATION}\n{body}".encode("utf-8")


def _read_wordbook(element: ET.Element) -> XmlWordbook:
    return XmlWordbook(
        name=_required_child_text(element, "name"),
        description=_child_text(element, "description"),
        chapters=[_read_chapter(child) for child in element.findall(TAG_CHAPTER)],
    )


def _read_chapter(element: ET.Element) -> XmlChapter:
    return XmlChapter(
        name=_required_child_text(element, "name"),
        words=[_read_word(child) for child in element.findall(TAG_WORD)],
    )


def _read_word(element: ET.Element) -> XmlWord:
    return XmlWord(
        source=_required_child_text(element, "source"),
        translation=_required_child_text(element, "translation"),
        note=_child_text(element, "note"),
    )


def _child_text(element: ET.Element, tag: str) -> Optional[str]:
    child = element.find(tag)
    if child is None:
        return None
    return (child.text or "").strip() or None


def _required_child_text(element: ET.Element, tag: str) -> str:
    child = element.find(tag)
    value = (child.text or "").strip() if child is not None else ""
    if not value:
        raise XmlError(f"missing field `{tag}` in <{element.tag}>")
    return value


def _append_text(parent: ET.Element, tag: str, value: str) -> None:
    ET.SubElement(parent, tag).text = value


def _chapter_element(chapter: Chapter) -> ET.Element:
    element = ET.Element(TAG_CHAPTER)
    _append_text(element, "name", chapter.name)
    for word in chapter.words:
        word_element = ET.SubElement(element, TAG_WORD)
        _append_text(word_element, "source", word.source)
        _append_text(word_element, "translation", word.translation)
        if word.note is not None:
            _append_text(word_element, "note", word.note)
    return element
