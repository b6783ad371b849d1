from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .types import PageRequest, PageResult, TransportFailure


logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3


class RetryPolicy:
    """Retries transport failures for a page; every other outcome returns at once.

    An empty page is a stopping signal, not an error, so it is never retried.
    """

    def __init__(
        self,
        fetch: Callable[[int], PageResult],
        max_retries: int = DEFAULT_MAX_RETRIES,
        delay: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        self._fetch = fetch
        self.max_retries = max_retries
        self.delay = delay
        self._sleep = sleep
        self.attempts = 0

    def fetch_with_retry(self, page_index: int, max_retries: Optional[int] = None) -> PageResult:
        budget = self.max_retries if max_retries is None else max_retries
        request = PageRequest(page_index=page_index)
        while True:
            self.attempts += 1
            result = self._fetch(request.page_index)
            if not isinstance(result, TransportFailure):
                return result
            logger.error("Error fetching data for page %d: %s", page_index, result.cause)
            if request.retry_count >= budget:
                logger.error(
                    "Failed to fetch data for page %d after %d retries.", page_index, budget
                )
                return result
            request = PageRequest(page_index=page_index, retry_count=request.retry_count + 1)
            logger.warning("Retrying page %d... (%d/%d)", page_index, request.retry_count, budget)
            if self.delay > 0:
                self._sleep(self.delay)
