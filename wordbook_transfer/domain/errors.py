"""Classified failures raised by the import codecs.

Every codec converts the exceptions of its parsing library into one of the
classes below, so callers only ever need to handle ``TransferError``.
"""

from __future__ import annotations


class TransferError(Exception):
    """Base class for user-facing import failures."""

    prefix = "Transfer error"

    def __init__(self, reason: str) -> None:
        self.reason = str(reason)
        super().__init__(f"{self.prefix}: {self.reason}")


class InvalidFormatError(TransferError):
    prefix = "Invalid file format"


class ParseError(TransferError):
    prefix = "Parse error"


class MissingFieldError(TransferError):
    prefix = "Missing required field"

    def __init__(self, field: str) -> None:
        self.field = str(field)
        super().__init__(self.field)


class InvalidDataError(TransferError):
    """A data row failed validation.

    ``row`` is 1-based and counts the header line, so the first data row
    below a header is row 2.
    """

    def __init__(self, row: int, message: str) -> None:
        self.row = int(row)
        self.detail = str(message)
        self.prefix = f"Invalid data at row {self.row}"
        super().__init__(self.detail)


class ExcelError(TransferError):
    prefix = "Excel error"


class XmlError(TransferError):
    prefix = "XML error"


class TransferIOError(TransferError):
    prefix = "IO error"


class ExportError(RuntimeError):
    """Encoding a model failed; an infrastructure fault, not bad user input."""
