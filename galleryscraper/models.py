"""
Data models for the gallery scraper
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Media:
    """A single downloadable item found on a post page"""
    title: str
    url: str
    file_type: str


@dataclass(frozen=True)
class MediaSelector:
    """One entry of the media selector cascade"""
    kind: str
    css: str
    attribute: str = "src"


@dataclass
class ListingLinks:
    """Post links found on a listing page"""
    links: List[str] = field(default_factory=list)
    skipped: int = 0


@dataclass
class FetchOutcome:
    """Result of handing a URL to a fetcher"""
    success: bool
    detail: Any = None


class DownloadStatus(str, Enum):
    DOWNLOADED = "downloaded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class DownloadResult:
    """Outcome of a single download attempt"""
    status: DownloadStatus
    filename: str
    path: Path
    detail: Optional[str] = None


@dataclass
class RunSummary:
    """Tally of everything that happened during a run"""
    pages_scraped: int = 0
    pages_failed: int = 0
    posts_found: int = 0
    posts_failed: int = 0
    anchors_skipped: int = 0
    placeholders: int = 0
    downloaded: int = 0
    skipped: int = 0
    failed: int = 0

    def record(self, result: DownloadResult) -> None:
        """Count a download result"""
        if result.status is DownloadStatus.DOWNLOADED:
            self.downloaded += 1
        elif result.status is DownloadStatus.SKIPPED:
            self.skipped += 1
        else:
            self.failed += 1

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization"""
        return {
            "pages_scraped": self.pages_scraped,
            "pages_failed": self.pages_failed,
            "posts_found": self.posts_found,
            "posts_failed": self.posts_failed,
            "anchors_skipped": self.anchors_skipped,
            "placeholders": self.placeholders,
            "downloaded": self.downloaded,
            "skipped": self.skipped,
            "failed": self.failed,
        }
