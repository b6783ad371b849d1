from __future__ import annotations

import os
from datetime import datetime
from typing import Callable, Iterable, Optional

from openpyxl import Workbook

from .types import Review


DEFAULT_FILE_NAME = "comments.xlsx"
SHEET_TITLE = "Comments"

DEFAULT_HEADERS = [
    "user_name",
    "created_at",
    "comment_body",
    "rating",
    "is_buyer",
    "recommendation_status",
]


def unique_file_name(
    base_file_name: str = DEFAULT_FILE_NAME,
    now: Callable[[], datetime] = datetime.now,
) -> str:
    """
    Returns base_file_name if free, otherwise ``<stem>-<timestamp><ext>`` next to it.
    """
    file_name = base_file_name
    directory, name = os.path.split(base_file_name)
    stem, ext = os.path.splitext(name)
    while os.path.exists(file_name):
        timestamp = now().isoformat().replace(":", "-").replace(".", "-")
        file_name = os.path.join(directory, f"{stem}-{timestamp}{ext or '.xlsx'}")
    return file_name


def write_reviews_to_excel(
    reviews: Iterable[Review],
    out_path: str,
    headers: Optional[list[str]] = None,
) -> int:
    headers = headers or DEFAULT_HEADERS

    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    for col_idx, title in enumerate(headers, start=1):
        ws.cell(row=1, column=col_idx).value = title

    count = 0
    for idx, r in enumerate(reviews, start=2):
        ws.cell(row=idx, column=1).value = r.author
        ws.cell(row=idx, column=2).value = r.timestamp
        ws.cell(row=idx, column=3).value = r.body_text
        ws.cell(row=idx, column=4).value = r.rating_value
        ws.cell(row=idx, column=5).value = r.verified_purchase
        ws.cell(row=idx, column=6).value = r.recommendation_status
        count += 1

    wb.save(out_path)
    return count
