"""Lookup of codecs by upload extension or export format name."""

from __future__ import annotations

from typing import Mapping

from ..config import AppConfig
from ..domain.errors import InvalidFormatError
from .base import WordbookCodec
from .delimited_codec import DelimitedCodec
from .json_codec import JsonCodec
from .spreadsheet_codec import SpreadsheetCodec
from .xml_codec import XmlCodec


class CodecRegistry:
    def __init__(
        self,
        *,
        import_codecs: Mapping[str, WordbookCodec],
        export_codecs: Mapping[str, WordbookCodec],
    ) -> None:
        self._import_codecs = {key.lower(): codec for key, codec in import_codecs.items()}
        self._export_codecs = {key.lower(): codec for key, codec in export_codecs.items()}

    @property
    def import_extensions(self) -> tuple[str, ...]:
        return tuple(self._import_codecs)

    @property
    def export_formats(self) -> tuple[str, ...]:
        return tuple(self._export_codecs)

    def for_extension(self, extension: str) -> WordbookCodec:
        key = str(extension or "").strip().lower().lstrip(".")
        codec = self._import_codecs.get(key)
        if codec is None:
            raise InvalidFormatError(f"Unsupported file format: {key}")
        return codec

    def for_format(self, file_format: str) -> WordbookCodec:
        key = str(file_format or "").strip().lower().lstrip(".")
        codec = self._export_codecs.get(key)
        if codec is None:
            raise InvalidFormatError(f"Unsupported format: {key}")
        return codec


def build_default_registry(config: AppConfig | None = None, logger_instance=None) -> CodecRegistry:
    json_codec = JsonCodec(
        indent=config.json_indent if config is not None else 2,
        logger_instance=logger_instance,
    )
    xml_codec = XmlCodec(logger_instance=logger_instance)
    delimited_codec = DelimitedCodec(
        write_bom=config.csv_export_bom if config is not None else False,
        logger_instance=logger_instance,
    )
    spreadsheet_codec = SpreadsheetCodec(logger_instance=logger_instance)
    return CodecRegistry(
        import_codecs={
            "json": json_codec,
            "xml": xml_codec,
            "xlsx": spreadsheet_codec,
            "xls": spreadsheet_codec,
            "csv": delimited_codec,
            "tsv": delimited_codec,
        },
        export_codecs={
            "json": json_codec,
            "xml": xml_codec,
            "csv": delimited_codec,
            "xlsx": spreadsheet_codec,
        },
    )
