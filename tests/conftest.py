"""Shared fixtures for codec tests."""

from __future__ import annotations

import io

import pytest
from openpyxl import Workbook

from wordbook_transfer.domain.models import Chapter, Word, Wordbook


def build_xlsx(rows, *, sheet_title: str = "Sheet1") -> bytes:
    """Create an in-memory workbook whose first sheet holds ``rows``."""
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = sheet_title
    for row in rows:
        worksheet.append(list(row))
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def xlsx_bytes():
    return build_xlsx


@pytest.fixture
def sample_wordbook() -> Wordbook:
    return Wordbook.create(
        "Français",
        "Everyday words",
        [
            Chapter.create(
                "Animals",
                [
                    Word("cat", "chat"),
                    Word("dog", "chien", "masculine"),
                ],
            ),
            Chapter.create(
                "Food",
                [
                    Word("bread", "pain", 'a,b"c'),
                    Word("cheese", "fromage", "line one\nline two"),
                ],
            ),
        ],
    )


@pytest.fixture
def sample_chapter(sample_wordbook: Wordbook) -> Chapter:
    return sample_wordbook.chapters[0]
