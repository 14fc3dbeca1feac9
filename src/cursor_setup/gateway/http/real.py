"""Real HttpClient implementation using urllib.request."""

import http.client
import logging
import sys
import urllib.error
import urllib.request
from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)

from cursor_setup.gateway.http.abc import HttpClient, HttpError

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64)"
CHUNK_SIZE = 1024 * 256


def _open(url: str, timeout: float):
    try:
        request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
        return urllib.request.urlopen(request, timeout=timeout)
    except urllib.error.HTTPError as e:
        raise HttpError(url=url, message=str(e.reason), status_code=e.code) from e
    except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as e:
        # ValueError covers malformed URLs
        raise HttpError(url=url, message=str(e) or type(e).__name__) from e


class RealHttpClient(HttpClient):
    """Production implementation that performs real HTTP GET requests."""

    def get_text(self, url: str, *, timeout: float) -> str:
        logger.debug("GET %s (timeout=%.1fs)", url, timeout)
        with _open(url, timeout) as response:
            try:
                body = response.read()
            except (http.client.HTTPException, OSError) as e:
                raise HttpError(url=url, message=str(e) or type(e).__name__) from e
            charset = response.headers.get_content_charset() or "utf-8"
        return body.decode(charset, errors="replace")

    def download(self, url: str, destination: Path, *, timeout: float) -> int:
        logger.debug("Downloading %s -> %s", url, destination)
        written = 0
        with _open(url, timeout) as response:
            length_header = response.headers.get("Content-Length")
            total = int(length_header) if length_header and length_header.isdigit() else None

            # Progress bar goes to stderr, only when someone is watching
            console = Console(stderr=True)
            progress = Progress(
                TextColumn("[bold blue]{task.description}"),
                BarColumn(),
                DownloadColumn(),
                TransferSpeedColumn(),
                TimeRemainingColumn(),
                console=console,
                disable=not sys.stderr.isatty(),
            )
            with progress, destination.open("wb") as out:
                task = progress.add_task(destination.name, total=total)
                while True:
                    try:
                        chunk = response.read(CHUNK_SIZE)
                    except (http.client.HTTPException, OSError) as e:
                        raise HttpError(url=url, message=str(e) or type(e).__name__) from e
                    if not chunk:
                        break
                    out.write(chunk)
                    written += len(chunk)
                    progress.update(task, advance=len(chunk))
        logger.debug("Downloaded %d bytes from %s", written, url)
        return written
