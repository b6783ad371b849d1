from __future__ import annotations

import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import TransportError
from .types import Empty, Malformed, PageResult, Records, TransportFailure


logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.digikala.com/v1/rate-review/products/{product_id}/"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)

DEFAULT_TIMEOUT_SECONDS = 15


def build_api_url(product_id: str) -> str:
    return API_BASE_URL.format(product_id=product_id)


def create_session(user_agent: Optional[str] = None, transport_retries: int = 0) -> requests.Session:
    """Session with the JSON-only, desktop-client headers the review API expects.

    Connection-level retries stay off by default; RetryPolicy owns the attempt budget.
    """
    session = requests.Session()
    session.headers.update(
        {
            "User-Agent": user_agent or DEFAULT_USER_AGENT,
            "Accept": "application/json, text/plain, */*",
            "x-web-client": "desktop",
            "x-web-optimize-response": "1",
        }
    )

    retry = Retry(
        total=transport_retries,
        backoff_factor=0.7,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET",),
        raise_on_status=False,
        respect_retry_after_header=True,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def _declared_total(data: dict) -> Optional[int]:
    pager = data.get("pager")
    if not isinstance(pager, dict):
        return None
    total = pager.get("total_pages")
    if isinstance(total, bool) or not isinstance(total, int) or total < 1:
        return None
    return total


def classify_payload(payload) -> PageResult:
    """Validate the response body once and map it onto a PageResult."""
    if not isinstance(payload, dict):
        return Empty()
    data = payload.get("data")
    if data is None:
        return Empty()
    if not isinstance(data, dict):
        return Malformed(f"'data' is {type(data).__name__}, expected object")
    comments = data.get("comments")
    if comments is None:
        return Empty()
    if not isinstance(comments, list):
        return Malformed(f"'comments' is {type(comments).__name__}, expected list")
    if not comments:
        return Empty()
    if not all(isinstance(c, dict) for c in comments):
        return Malformed("'comments' contains non-object items")
    return Records(items=comments, declared_total_pages=_declared_total(data))


class PageFetcher:
    """Fetches one page of reviews for a single product. Never retries."""

    def __init__(
        self,
        product_id: str,
        session: Optional[requests.Session] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.product_id = product_id
        self.base_url = build_api_url(product_id)
        self.session = session or create_session()
        self.timeout_seconds = timeout_seconds

    def fetch(self, page_index: int) -> PageResult:
        try:
            response = self.session.get(
                self.base_url,
                params={"page": page_index},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.debug("page %d transport failure: %s", page_index, exc)
            return TransportFailure(TransportError(page_index, exc))

        result = classify_payload(payload)
        if isinstance(result, Records) and result.declared_total_pages is None:
            logger.warning("No pager information found for page %d", page_index)
        return result
