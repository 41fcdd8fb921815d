"""File-format codecs for wordbook import and export."""

from .base import (
    CONTENT_TYPE_CSV,
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_XLSX,
    CONTENT_TYPE_XML,
    WordbookCodec,
)
from .delimited_codec import DelimitedCodec, escape_csv_field
from .json_codec import JsonCodec
from .registry import CodecRegistry, build_default_registry
from .spreadsheet_codec import SpreadsheetCodec
from .templates import TEMPLATE_FORMATS, TEMPLATE_TARGETS, TemplateGenerator
from .xml_codec import XmlCodec

__all__ = [
    "CONTENT_TYPE_CSV",
    "CONTENT_TYPE_JSON",
    "CONTENT_TYPE_XLSX",
    "CONTENT_TYPE_XML",
    "CodecRegistry",
    "DelimitedCodec",
    "JsonCodec",
    "SpreadsheetCodec",
    "TEMPLATE_FORMATS",
    "TEMPLATE_TARGETS",
    "TemplateGenerator",
    "WordbookCodec",
    "XmlCodec",
    "build_default_registry",
    "escape_csv_field",
]
