"""URL helpers for media excerpts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import urlparse

if TYPE_CHECKING:
    from sophistree_argument.models.media_excerpt import UrlInfo

logger = logging.getLogger(__name__)


def preferred_url(url_info: UrlInfo) -> str:
    """The canonical URL when the page declared one, else the captured URL."""
    return url_info.canonical_url or url_info.url


def extract_hostname(url_info: UrlInfo) -> str:
    """
    Hostname of the preferred URL, lowercased.

    Returns an empty string for URLs without a network location (file:// PDFs,
    bare paths) and for URLs urlparse rejects (unbalanced IPv6 brackets).
    """
    url = "".join(preferred_url(url_info).split())
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        logger.warning("Cannot parse hostname from URL %r", url)
        return ""
    return (hostname or "").lower()


def is_matching_url_info(excerpt_url_info: UrlInfo, page_url_info: UrlInfo) -> bool:
    """
    Whether an excerpt belongs on the page with the given UrlInfo.

    The most specific identifier on the excerpt wins: PDF fingerprint, then
    canonical URL, then the plain URL.
    """
    if excerpt_url_info.pdf_fingerprint:
        return excerpt_url_info.pdf_fingerprint == page_url_info.pdf_fingerprint
    if excerpt_url_info.canonical_url:
        return excerpt_url_info.canonical_url == page_url_info.canonical_url
    return excerpt_url_info.url == page_url_info.url
