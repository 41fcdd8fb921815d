"""Import/export orchestration: codec selection, decoding, encoding."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from ..config import DEFAULT_CHAPTER_NAME, DEFAULT_WORDBOOK_NAME, AppConfig
from ..domain.errors import TransferError
from ..domain.models import Chapter, Wordbook
from ..formats.registry import CodecRegistry, build_default_registry
from ..formats.templates import TemplateGenerator
from ..utils import file_extension
from .ports import ImportResult, VocabularyStore

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_RE = re.compile(r'["\r\n\\]')


@dataclass(frozen=True)
class ExportPayload:
    content: bytes
    content_type: str
    filename: str

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'

    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": self.content_type,
            "Content-Disposition": self.content_disposition,
        }


def export_filename(name: str, extension: str) -> str:
    safe_name = _UNSAFE_FILENAME_RE.sub("_", str(name or "")).strip() or "export"
    return f"{safe_name}.{extension}"


class TransferService:
    def __init__(
        self,
        *,
        store: VocabularyStore | None = None,
        registry: CodecRegistry | None = None,
        templates: TemplateGenerator | None = None,
        config: AppConfig | None = None,
        logger_instance=None,
    ) -> None:
        self.store = store
        self.logger = logger_instance or logger
        self.registry = registry or build_default_registry(config, logger_instance=self.logger)
        self.templates = templates or TemplateGenerator(self.registry.for_format("json"))
        self.default_wordbook_name = (
            config.default_wordbook_name if config is not None else DEFAULT_WORDBOOK_NAME
        )
        self.default_chapter_name = (
            config.default_chapter_name if config is not None else DEFAULT_CHAPTER_NAME
        )

    # Import

    def parse_wordbook(
        self,
        data: bytes,
        filename: Optional[str],
        name: Optional[str] = None,
    ) -> Wordbook:
        extension = file_extension(filename)
        try:
            codec = self.registry.for_extension(extension)
            wordbook = codec.decode_wordbook(data, name or self.default_wordbook_name)
        except TransferError as exc:
            self.logger.warning("Rejected wordbook upload %s: %s", filename, exc)
            raise
        self.logger.info(
            "Parsed wordbook upload %s as %s: chapters=%s words=%s",
            filename,
            codec.format_name,
            len(wordbook.chapters),
            wordbook.word_count,
        )
        return wordbook

    def parse_chapter(
        self,
        data: bytes,
        filename: Optional[str],
        name: Optional[str] = None,
    ) -> Chapter:
        extension = file_extension(filename)
        try:
            codec = self.registry.for_extension(extension)
            chapter = codec.decode_chapter(data, name or self.default_chapter_name)
        except TransferError as exc:
            self.logger.warning("Rejected chapter upload %s: %s", filename, exc)
            raise
        self.logger.info(
            "Parsed chapter upload %s as %s: words=%s",
            filename,
            codec.format_name,
            chapter.word_count,
        )
        return chapter

    def import_wordbook(
        self,
        data: bytes,
        filename: Optional[str],
        name: Optional[str] = None,
    ) -> ImportResult:
        wordbook = self.parse_wordbook(data, filename, name)
        result = self._require_store().save_wordbook(wordbook)
        self.logger.info(
            "Imported wordbook %r: chapters_created=%s words_created=%s",
            wordbook.name,
            result.chapters_created,
            result.words_created,
        )
        return result

    def import_chapter(
        self,
        wordbook_id: int,
        data: bytes,
        filename: Optional[str],
        name: Optional[str] = None,
    ) -> ImportResult:
        chapter = self.parse_chapter(data, filename, name)
        result = self._require_store().save_chapter(wordbook_id, chapter)
        self.logger.info(
            "Imported chapter %r into wordbook %s: words_created=%s",
            chapter.name,
            wordbook_id,
            result.words_created,
        )
        return result

    # Export

    def build_wordbook_export(self, wordbook: Wordbook, file_format: str) -> ExportPayload:
        codec = self.registry.for_format(file_format)
        payload = ExportPayload(
            content=codec.encode_wordbook(wordbook),
            content_type=codec.content_type,
            filename=export_filename(wordbook.name, codec.extension),
        )
        self.logger.info(
            "Exported wordbook %r as %s: words=%s bytes=%s",
            wordbook.name,
            codec.format_name,
            wordbook.word_count,
            len(payload.content),
        )
        return payload

    def build_chapter_export(self, chapter: Chapter, file_format: str) -> ExportPayload:
        codec = self.registry.for_format(file_format)
        payload = ExportPayload(
            content=codec.encode_chapter(chapter),
            content_type=codec.content_type,
            filename=export_filename(chapter.name, codec.extension),
        )
        self.logger.info(
            "Exported chapter %r as %s: words=%s bytes=%s",
            chapter.name,
            codec.format_name,
            chapter.word_count,
            len(payload.content),
        )
        return payload

    def export_wordbook(self, wordbook_id: int, file_format: str) -> ExportPayload:
        self.registry.for_format(file_format)
        wordbook = self._require_store().load_wordbook(wordbook_id)
        return self.build_wordbook_export(wordbook, file_format)

    def export_chapter(self, wordbook_id: int, chapter_id: int, file_format: str) -> ExportPayload:
        self.registry.for_format(file_format)
        chapter = self._require_store().load_chapter(wordbook_id, chapter_id)
        return self.build_chapter_export(chapter, file_format)

    # Templates

    def download_template(self, file_format: str, target: str) -> ExportPayload:
        content = self.templates.render(file_format, target)
        codec = self.registry.for_format(file_format)
        return ExportPayload(
            content=content,
            content_type=codec.content_type,
            filename=f"{target.strip().lower()}_template.{codec.extension}",
        )

    def _require_store(self) -> VocabularyStore:
        if self.store is None:
            raise RuntimeError("No vocabulary store configured for import/export.")
        return self.store
