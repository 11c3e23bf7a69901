"""
Listing page pagination and post link discovery
"""

import logging

from bs4 import BeautifulSoup

from .config import PAGE_SIZE
from .errors import MissingAttributeError
from .models import ListingLinks


logger = logging.getLogger(__name__)

# Post thumbnails on listing pages are anchors carrying an empty inline style
POST_LINK_SELECTOR = 'a[style=""]'


def next_page(base_url: str, page: int) -> str:
    """Build the listing URL for a zero-based page index"""
    return f"{base_url}&pid={page * PAGE_SIZE}"


def extract_post_links(document: BeautifulSoup) -> ListingLinks:
    """Collect post links from a listing page in document order"""
    result = ListingLinks()

    for anchor in document.select(POST_LINK_SELECTOR):
        try:
            result.links.append(_require_href(anchor))
        except MissingAttributeError as exc:
            logger.debug(f"Skipping anchor: {exc}")
            result.skipped += 1

    if result.skipped:
        logger.warning(f"Skipped {result.skipped} post anchors without href")
    logger.debug(f"Found {len(result.links)} post links")
    return result


def _require_href(anchor) -> str:
    href = anchor.get('href')
    if not href:
        raise MissingAttributeError(POST_LINK_SELECTOR, 'href')
    return href
