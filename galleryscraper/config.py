"""
Configuration and constants for the gallery scraper
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from . import __version__
from .errors import ConfigurationError


# Listing pages are paginated by post offset, 42 posts per page
PAGE_SIZE = 42

PLACEHOLDER_URL = "https://i.pinimg.com/originals/13/92/6c/13926cfb3fd8818166d8b3149e0696de.jpg"
PLACEHOLDER_TITLE = "placeholder"
DEFAULT_FILE_TYPE = ".jpg"

MAX_TITLE_LENGTH = 60

USER_AGENT = f"gallery-scraper/{__version__}"
DEFAULT_TIMEOUT = 30.0


@dataclass
class ScraperConfig:
    """Settings that control a single scraping run"""
    base_url: str
    start_page: int = 0
    last_page: int = 0
    output_path: Path = Path(".")
    origin: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    workers: int = 1

    def validate(self) -> None:
        """Reject settings the driver loop cannot work with"""
        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(f"Invalid listing URL: {self.base_url!r}")
        if self.start_page < 0 or self.last_page < 0:
            raise ConfigurationError("Page indexes must not be negative")
        if self.workers < 1:
            raise ConfigurationError("At least one download worker is required")
        if self.timeout <= 0:
            raise ConfigurationError("Timeout must be positive")

    @property
    def site_origin(self) -> str:
        """Origin that relative post links are resolved against"""
        if self.origin:
            return self.origin.rstrip('/')
        parsed = urlparse(self.base_url)
        return f"{parsed.scheme}://{parsed.netloc}"
