"""Application layer orchestration."""

from .ports import (
    ChapterNotFound,
    ImportResult,
    VocabularyStore,
    WordbookNotFound,
)
from .transfer_service import ExportPayload, TransferService, export_filename

__all__ = [
    "ChapterNotFound",
    "ExportPayload",
    "ImportResult",
    "TransferService",
    "VocabularyStore",
    "WordbookNotFound",
    "export_filename",
]
