"""
Gallery Scraper - paginate a gallery site and download the media of every post
"""

__version__ = "0.1.0"
__author__ = "Gallery Scraper Team"

from .models import Media, RunSummary
from .scraper import GalleryScraper

__all__ = ["Media", "RunSummary", "GalleryScraper"]
