from __future__ import annotations

import logging
from typing import Callable, Optional

from .aggregate import ResultAggregator
from .retry import RetryPolicy
from .types import AggregateState, Empty, Malformed, PageResult, Records, RunStatus


logger = logging.getLogger(__name__)

DEFAULT_MAX_PAGE_BOUND = 101


class PaginationController:
    """Walks review pages strictly in order and collects their records.

    Page 1 decides the total page count; any failure there aborts the run.
    A failure on a later page ends the run early but keeps what was gathered.
    The number of pages requested never exceeds ``max_page_bound``, whatever
    total the API declares.
    """

    def __init__(
        self,
        retry_policy: RetryPolicy,
        on_page: Optional[Callable[[int, PageResult], None]] = None,
    ):
        self.retry_policy = retry_policy
        self.on_page = on_page

    def _attempt(self, state: AggregateState, page_index: int) -> PageResult:
        state.last_page_attempted = page_index
        before = self.retry_policy.attempts
        result = self.retry_policy.fetch_with_retry(page_index)
        state.attempts += self.retry_policy.attempts - before
        if self.on_page is not None:
            self.on_page(page_index, result)
        return result

    def run(self, max_page_bound: int = DEFAULT_MAX_PAGE_BOUND) -> AggregateState:
        if max_page_bound < 1:
            raise ValueError("max_page_bound must be at least 1")

        aggregator = ResultAggregator()
        state = AggregateState()

        first = self._attempt(state, 1)
        if not isinstance(first, Records):
            state.status = RunStatus.ABORTED
            state.failure = first
            logger.error("Failed to fetch any data: %s", _describe(first))
            return state

        aggregator.append(first.items)
        state.total_pages_known = first.declared_total_pages
        logger.info("Data for page 1 saved successfully.")

        last_page = min(state.total_pages_known or 1, max_page_bound)
        for page_index in range(2, last_page + 1):
            result = self._attempt(state, page_index)
            if not isinstance(result, Records):
                state.failure = result
                logger.info("Stopping at page %d: %s", page_index, _describe(result))
                break
            # Totals declared after page 1 are ignored.
            aggregator.append(result.items)
            logger.info("Data for page %d saved successfully.", page_index)

        state.records = aggregator.snapshot()
        state.status = RunStatus.DONE
        return state


def _describe(result: PageResult) -> str:
    if isinstance(result, Empty):
        return "no comments found"
    if isinstance(result, Malformed):
        return f"malformed response ({result.reason})"
    return f"transport failure ({getattr(result, 'cause', result)})"
