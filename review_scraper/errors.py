"""Exceptions raised by the review scraper.

Empty and malformed pages are data conditions reported through PageResult,
not exceptions.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import AggregateState


class ReviewScraperError(Exception):
    """Base class for scraper errors."""


class ConfigurationError(ReviewScraperError):
    """No usable product identifier; raised before any network activity."""


class TransportError(ReviewScraperError):
    """A single failed request for one page (timeout, connection, non-2xx, bad JSON)."""

    def __init__(self, page_index: int, cause: Exception):
        self.page_index = page_index
        self.cause = cause
        super().__init__(f"page {page_index}: {cause}")


class RunAborted(ReviewScraperError):
    """The first page could not be retrieved, so nothing was collected."""

    def __init__(self, state: "AggregateState", message: str = ""):
        self.state = state
        super().__init__(message or f"run aborted on page {state.last_page_attempted}")
