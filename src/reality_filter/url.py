"""Source name normalization."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


def extract_domain(source: str) -> str:
    """Reduce an article source to a bare lowercase domain.

    Accepts full URLs ("https://www.bbc.co.uk/news") as well as bare hosts
    ("www.Reuters.com"). Anything without a dot is returned lowercased and
    stripped, so plain publisher names still make stable lookup keys.

    Args:
        source: The article source as submitted.

    Returns:
        The domain name (without 'www.' prefix), or "unknown" if empty.
    """
    text = source.strip().lower()
    if not text:
        return "unknown"
    if "://" not in text:
        if "." not in text:
            return text
        text = f"http://{text}"
    try:
        domain = urlparse(text).hostname or ""
    except ValueError:
        logger.warning(f"Could not parse source {source!r}")
        return "unknown"
    if not domain:
        logger.warning(f"Could not get domain from source {source!r}")
        return "unknown"
    if domain.startswith("www."):
        domain = domain[4:]
    return domain
