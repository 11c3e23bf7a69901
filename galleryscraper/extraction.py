"""
Media extraction from post pages using a prioritized selector cascade
"""

import logging
from typing import Optional, Sequence

from bs4 import BeautifulSoup

from .config import DEFAULT_FILE_TYPE, PLACEHOLDER_TITLE, PLACEHOLDER_URL
from .errors import MissingAttributeError
from .formats import get_format
from .models import Media, MediaSelector


logger = logging.getLogger(__name__)

IMAGE = "image"
VIDEO = "video"

# Tried in order; the first selector with a usable match wins
MEDIA_SELECTORS = (
    MediaSelector(IMAGE, 'img[id="image"]'),
    MediaSelector(VIDEO, 'source[type="video/mp4"]'),
    MediaSelector(VIDEO, 'source[type="video/mpeg"]'),
    MediaSelector(VIDEO, 'source[type="video/mpg"]'),
    MediaSelector(VIDEO, 'source[type="video/webm"]'),
    MediaSelector(VIDEO, 'source[type="video/avi"]'),
)

PLACEHOLDER_MEDIA = Media(
    title=PLACEHOLDER_TITLE,
    url=PLACEHOLDER_URL,
    file_type=get_format(PLACEHOLDER_URL) or DEFAULT_FILE_TYPE,
)


class MediaExtractor:
    """Extracts one media item from a post page"""

    def __init__(self, selectors: Sequence[MediaSelector] = MEDIA_SELECTORS):
        self.selectors = tuple(selectors)

    def extract(self, document: BeautifulSoup) -> Media:
        """Return the first media item matched by the cascade, or the placeholder"""
        for selector in self.selectors:
            try:
                url = self._match(document, selector)
            except MissingAttributeError as exc:
                logger.warning(f"{exc}, trying next selector")
                continue

            if url is None:
                continue

            logger.debug(f"Matched {selector.kind} selector {selector.css}: {url}")
            return media_from_url(url)

        logger.info("No media found on post page, using placeholder")
        return PLACEHOLDER_MEDIA

    def _match(self, document: BeautifulSoup, selector: MediaSelector) -> Optional[str]:
        element = document.select_one(selector.css)
        if element is None:
            return None

        value = element.get(selector.attribute)
        if not value:
            raise MissingAttributeError(selector.css, selector.attribute)
        return value


def media_from_url(url: str) -> Media:
    """Describe a media URL: slashes become dashes in the title"""
    return Media(
        title=url.replace('/', '-'),
        url=url,
        file_type=get_format(url) or DEFAULT_FILE_TYPE,
    )


def extract_media(document: BeautifulSoup) -> Media:
    """Run the default selector cascade over a post page"""
    return MediaExtractor().extract(document)


def is_placeholder(media: Media) -> bool:
    return media == PLACEHOLDER_MEDIA
