"""Wordbook import/export codecs."""

from .application import ExportPayload, ImportResult, TransferService
from .domain import Chapter, TransferError, Word, Wordbook

__all__ = [
    "Chapter",
    "ExportPayload",
    "ImportResult",
    "TransferError",
    "TransferService",
    "Word",
    "Wordbook",
]
