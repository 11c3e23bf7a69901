"""
Exceptions raised by the gallery scraper
"""

from typing import Optional


class ScraperError(Exception):
    """Base class for all scraper errors"""


class ConfigurationError(ScraperError):
    """Invalid settings or a missing external tool"""


class FetchError(ScraperError):
    """An HTTP request failed with a bad status or a transport error"""

    def __init__(self, url: str, reason: Optional[Exception] = None):
        self.url = url
        self.reason = reason
        message = f"Failed to fetch {url}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)


class MissingAttributeError(ScraperError):
    """An element matched a selector but lacks the attribute we need"""

    def __init__(self, selector: str, attribute: str):
        self.selector = selector
        self.attribute = attribute
        super().__init__(f"Element matching {selector!r} has no {attribute!r} attribute")
