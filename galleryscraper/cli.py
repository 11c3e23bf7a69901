"""
Command line interface for the gallery scraper
"""

import json
import logging
from pathlib import Path
from typing import Optional

import click
import requests
from tabulate import tabulate

from .config import DEFAULT_TIMEOUT, ScraperConfig
from .downloader import RequestsFetcher, WgetFetcher
from .errors import ConfigurationError, ScraperError
from .models import RunSummary
from .scraper import GalleryScraper


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def format_summary(summary: RunSummary) -> str:
    """Render the run tally as a table"""
    rows = [[key.replace('_', ' ').capitalize(), value] for key, value in summary.to_dict().items()]
    return tabulate(rows, headers=["Metric", "Count"], tablefmt="grid")


@click.command()
@click.option(
    '--url',
    '-u',
    required=True,
    help='Base listing URL; the page offset is appended as &pid=N'
)
@click.option(
    '--start-page',
    '-s',
    default=0,
    help='Initial page to scrape',
    type=int
)
@click.option(
    '--last-page',
    '-l',
    default=0,
    help='Last page to scrape (inclusive)',
    type=int
)
@click.option(
    '--output-path',
    '-o',
    default='.',
    help='Directory downloaded files are written to',
    type=click.Path(file_okay=False, path_type=Path)
)
@click.option(
    '--origin',
    help='Site origin that post links are resolved against (default: origin of --url)'
)
@click.option(
    '--fetcher',
    type=click.Choice(['wget', 'requests']),
    default='wget',
    help='How media files are downloaded (default: wget subprocess)'
)
@click.option(
    '--workers',
    default=1,
    help='Number of parallel downloads per page (default: sequential)',
    type=int
)
@click.option(
    '--timeout',
    default=DEFAULT_TIMEOUT,
    help='HTTP timeout in seconds',
    type=float
)
@click.option(
    '--report',
    help='Write the run summary as JSON to this file',
    type=click.Path(dir_okay=False)
)
@click.option(
    '--verbose',
    '-v',
    is_flag=True,
    help='Enable verbose logging'
)
def main(
    url: str,
    start_page: int,
    last_page: int,
    output_path: Path,
    origin: Optional[str],
    fetcher: str,
    workers: int,
    timeout: float,
    report: Optional[str],
    verbose: bool
) -> None:
    """Download the media of every post on a range of gallery listing pages

    Examples:
        gallery-scraper --url "https://example.com/index.php?page=post&s=list"
        gallery-scraper -u "https://example.com/index.php?page=post&s=list" -s 0 -l 4 -o downloads
    """
    setup_logging(verbose)

    config = ScraperConfig(
        base_url=url,
        start_page=start_page,
        last_page=last_page,
        output_path=output_path,
        origin=origin,
        timeout=timeout,
        workers=workers,
    )

    try:
        with requests.Session() as session:
            if fetcher == 'requests':
                media_fetcher = RequestsFetcher(session, timeout=timeout)
            else:
                media_fetcher = WgetFetcher()

            with GalleryScraper(config, fetcher=media_fetcher, session=session) as scraper:
                summary = scraper.scrape()

        click.echo(format_summary(summary))

        if report:
            try:
                with open(report, 'w', encoding='utf-8') as f:
                    f.write(json.dumps(summary.to_dict(), indent=2))
            except OSError as exc:
                raise ConfigurationError(f"Could not write report to {report}: {exc}") from exc
            click.echo(f"Summary saved to {report}")

    except KeyboardInterrupt:
        click.echo("\nScraping interrupted by user", err=True)
        raise click.Abort()
    except ScraperError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise click.Abort()


if __name__ == '__main__':
    main()
