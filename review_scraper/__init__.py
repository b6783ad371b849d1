"""
Product review scraper package.

Exports:
- Review: dataclass representing one review record
- PaginationController: page-by-page retrieval with retries and a page bound
- scrape_reviews_to_excel: high-level function to fetch all reviews and save to Excel
"""

from .types import AggregateState, Review, RunStatus
from .pagination import PaginationController
from .cli import scrape_reviews_to_excel

__all__ = [
    "AggregateState",
    "PaginationController",
    "Review",
    "RunStatus",
    "scrape_reviews_to_excel",
]
