from __future__ import annotations

import re
from typing import Optional

from .errors import ConfigurationError


PRODUCT_ID_RE = re.compile(r"dkp-(\d+)")
BARE_ID_RE = re.compile(r"^\s*(\d+)\s*$")


def find_product_id(reference: Optional[str]) -> Optional[str]:
    """Return the numeric product id from a product URL (``.../dkp-123/...``) or a bare id."""
    if not reference:
        return None
    m = PRODUCT_ID_RE.search(reference) or BARE_ID_RE.match(reference)
    return m.group(1) if m else None


def extract_product_id(reference: Optional[str]) -> str:
    product_id = find_product_id(reference)
    if product_id is None:
        raise ConfigurationError(f"Product ID not found in the provided URL: {reference!r}")
    return product_id
