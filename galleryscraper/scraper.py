"""
Main scraper orchestrator that walks listing pages and downloads post media
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

from .config import USER_AGENT, ScraperConfig
from .discovery import extract_post_links, next_page
from .downloader import Downloader, WgetFetcher
from .errors import FetchError
from .extraction import MediaExtractor, is_placeholder
from .models import Media, RunSummary


logger = logging.getLogger(__name__)


class GalleryScraper:
    """Main scraper class that orchestrates the scraping process"""

    def __init__(self, config: ScraperConfig, fetcher=None,
                 session: Optional[requests.Session] = None):
        config.validate()
        self.config = config
        self.origin = config.site_origin

        # Setup HTTP session with proper headers
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': USER_AGENT})

        # Initialize components
        self.extractor = MediaExtractor()
        self.downloader = Downloader(config.output_path, fetcher or WgetFetcher())

    def scrape(self) -> RunSummary:
        """Scrape every listing page in the configured range"""
        summary = RunSummary()
        start, last = self.config.start_page, self.config.last_page
        logger.info(f"Starting scrape of {self.config.base_url} (pages {start}-{last})")

        if start > last:
            logger.warning(f"Start page {start} is after last page {last}, nothing to do")
            return summary

        for page in range(start, last + 1):
            listing_url = next_page(self.config.base_url, page)
            try:
                document = self.fetch_document(listing_url)
            except FetchError as exc:
                # The first page doubles as a check that the base URL works
                if page == start:
                    raise
                logger.error(f"Skipping page {page}: {exc}")
                summary.pages_failed += 1
                continue

            listing = extract_post_links(document)
            summary.pages_scraped += 1
            summary.posts_found += len(listing.links)
            summary.anchors_skipped += listing.skipped
            logger.info(f"Page {page}: found {len(listing.links)} posts")

            self._process_posts(listing.links, summary)

        logger.info(
            f"Scraping completed: {summary.downloaded} downloaded, "
            f"{summary.skipped} skipped, {summary.failed} failed"
        )
        return summary

    def fetch_document(self, url: str) -> BeautifulSoup:
        """Fetch a page and parse it"""
        logger.debug(f"Fetching {url}")
        try:
            response = self.session.get(url, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(url, exc) from exc
        return BeautifulSoup(response.text, 'html.parser')

    def post_url(self, link: str) -> str:
        """Resolve a post link against the site origin"""
        return urljoin(self.origin + '/', link)

    def extract_post(self, link: str) -> Media:
        """Fetch a post page and extract its media"""
        document = self.fetch_document(self.post_url(link))
        return self.extractor.extract(document)

    def _process_posts(self, links: List[str], summary: RunSummary) -> None:
        if self.config.workers > 1:
            self._process_posts_parallel(links, summary)
            return

        for link in links:
            media = self._media_for(link, summary)
            if media is not None:
                summary.record(self.downloader.download(media))

    def _process_posts_parallel(self, links: List[str], summary: RunSummary) -> None:
        """Extract sequentially, download with a bounded worker pool"""
        media_items = {}
        for link in links:
            media = self._media_for(link, summary)
            if media is None:
                continue
            # Two workers must never write the same destination
            destination = self.downloader.destination_for(media)
            if destination in media_items:
                logger.info(f"{destination.name} already queued")
                summary.skipped += 1
                continue
            media_items[destination] = media

        logger.info(f"Downloading {len(media_items)} items with {self.config.workers} workers")
        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            futures = [executor.submit(self.downloader.download, media) for media in media_items.values()]
            for future in as_completed(futures):
                summary.record(future.result())

    def _media_for(self, link: str, summary: RunSummary) -> Optional[Media]:
        try:
            media = self.extract_post(link)
        except FetchError as exc:
            logger.error(f"Skipping post {link}: {exc}")
            summary.posts_failed += 1
            return None

        if is_placeholder(media):
            summary.placeholders += 1
        return media

    def close(self) -> None:
        if hasattr(self.downloader.fetcher, 'close'):
            self.downloader.fetcher.close()
        self.session.close()

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - cleanup session"""
        self.close()
