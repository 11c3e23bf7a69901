"""
Downloading of media items to the output directory
"""

import logging
import os
import shutil
import subprocess
import threading
from pathlib import Path
from typing import Optional, Union

import requests

from .config import DEFAULT_TIMEOUT, MAX_TITLE_LENGTH
from .errors import ConfigurationError
from .models import DownloadResult, DownloadStatus, FetchOutcome, Media


logger = logging.getLogger(__name__)

PARTIAL_SUFFIX = ".part"


def sanitize_title(title: str) -> str:
    """Strip spaces from a title and cap it at MAX_TITLE_LENGTH characters"""
    return title.replace(' ', '')[:MAX_TITLE_LENGTH]


class WgetFetcher:
    """Fetches files by running wget as a subprocess"""

    def __init__(self, executable: str = "wget"):
        path = shutil.which(executable)
        if path is None:
            raise ConfigurationError(f"{executable} was not found on PATH")
        self.executable = path

    def fetch(self, url: str, destination: Path) -> FetchOutcome:
        """Run wget and report success based on its exit status"""
        command = [
            self.executable,
            "-P", str(destination.parent),
            "-O", str(destination),
            url,
        ]
        logger.debug(f"Running: {' '.join(command)}")

        try:
            result = subprocess.run(command, capture_output=True, text=True, check=False)
        except OSError as exc:
            return FetchOutcome(success=False, detail=str(exc))

        return FetchOutcome(success=result.returncode == 0, detail=result)


class RequestsFetcher:
    """Fetches files in-process by streaming the response body

    The given session is only used from the thread that created the fetcher.
    Worker threads each get their own session carrying the same headers,
    since a ``requests.Session`` is not safe to share between threads.
    """

    def __init__(self, session: requests.Session, timeout: float = DEFAULT_TIMEOUT,
                 chunk_size: int = 64 * 1024):
        self.session = session
        self.timeout = timeout
        self.chunk_size = chunk_size
        self._owner = threading.get_ident()
        self._local = threading.local()
        self._worker_sessions = []
        self._lock = threading.Lock()

    def fetch(self, url: str, destination: Path) -> FetchOutcome:
        """Stream url into destination"""
        session = self._session_for_thread()
        try:
            with session.get(url, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                with open(destination, 'wb') as f:
                    for chunk in response.iter_content(chunk_size=self.chunk_size):
                        if chunk:
                            f.write(chunk)
        except (requests.RequestException, OSError) as exc:
            return FetchOutcome(success=False, detail=str(exc))

        return FetchOutcome(success=True, detail=f"saved {destination}")

    def _session_for_thread(self) -> requests.Session:
        if threading.get_ident() == self._owner:
            return self.session

        session = getattr(self._local, 'session', None)
        if session is None:
            session = requests.Session()
            session.headers.update(self.session.headers)
            self._local.session = session
            with self._lock:
                self._worker_sessions.append(session)
        return session

    def close(self) -> None:
        """Close the sessions opened for worker threads"""
        with self._lock:
            sessions, self._worker_sessions = self._worker_sessions, []
        for session in sessions:
            session.close()


class Downloader:
    """Saves media into an output directory, skipping files that already exist

    Files are fetched into a ``.part`` sibling and moved into place only on
    success, so a failed fetch never leaves a file that would be skipped on
    the next run.
    """

    def __init__(self, output_dir: Union[str, Path], fetcher):
        self.output_dir = Path(output_dir)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigurationError(f"Cannot use output directory {self.output_dir}: {exc}") from exc
        self.fetcher = fetcher

    def destination_for(self, media: Media) -> Path:
        """Path a media item is saved to"""
        return self.output_dir / (sanitize_title(media.title) + media.file_type)

    def download(self, media: Media) -> DownloadResult:
        """Download a media item unless its destination already exists"""
        destination = self.destination_for(media)
        filename = destination.name

        if destination.exists():
            logger.info(f"{filename} already exists")
            return DownloadResult(DownloadStatus.SKIPPED, filename, destination)

        partial = destination.with_name(filename + PARTIAL_SUFFIX)
        outcome = self.fetcher.fetch(media.url, partial)

        if outcome.success:
            try:
                os.replace(partial, destination)
            except OSError as exc:
                logger.error(f"FAILED FILES: {filename} (could not move into place: {exc})")
                self._discard(partial)
                return DownloadResult(DownloadStatus.FAILED, filename, destination, str(exc))

            logger.info(f"{filename} downloaded successfully!")
            return DownloadResult(DownloadStatus.DOWNLOADED, filename, destination)

        self._discard(partial)
        logger.error(f"FAILED FILES: {filename}")
        logger.error(f"{outcome.detail!r}")
        return DownloadResult(DownloadStatus.FAILED, filename, destination, _describe(outcome.detail))

    def _discard(self, partial: Path) -> None:
        try:
            partial.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning(f"Could not remove partial file {partial}: {exc}")


def _describe(detail) -> Optional[str]:
    if isinstance(detail, subprocess.CompletedProcess):
        stderr = (detail.stderr or '').strip()
        return f"exit status {detail.returncode}" + (f": {stderr.splitlines()[-1]}" if stderr else "")
    if detail is None:
        return None
    return str(detail)
