from __future__ import annotations

from typing import Iterable, List

from .types import Review


def review_from_comment(comment: dict) -> Review:
    return Review(
        author=comment.get("user_name"),
        timestamp=comment.get("created_at"),
        body_text=comment.get("body"),
        rating_value=comment.get("rate"),
        verified_purchase=comment.get("is_buyer"),
        recommendation_status=comment.get("recommendation_status"),
    )


class ResultAggregator:
    """Append-only store of reviews, kept in the order pages were fetched."""

    def __init__(self) -> None:
        self._records: List[Review] = []

    def append(self, items: Iterable[dict]) -> int:
        added = [review_from_comment(item) for item in items]
        self._records.extend(added)
        return len(added)

    def snapshot(self) -> List[Review]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)
