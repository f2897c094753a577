"""URL validation applied before any browser resource is allocated."""

import logging
from typing import Iterable, List
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


def is_valid_url(url: str) -> bool:
    """Return True when *url* parses with a scheme and a whitespace-free host."""
    try:
        parsed = urlparse(url)
    except (TypeError, ValueError):
        return False
    host = parsed.hostname
    if not parsed.scheme or not host:
        return False
    return not any(c.isspace() for c in host)


def filter_valid_urls(urls: Iterable[str]) -> List[str]:
    """Return the valid entries of *urls* in their original order.

    Rejected URLs are logged and dropped; they are never retried.
    """
    valid: List[str] = []
    for url in urls:
        if is_valid_url(url):
            valid.append(url)
        else:
            logger.error("Invalid URL: %s", url)
    return valid
