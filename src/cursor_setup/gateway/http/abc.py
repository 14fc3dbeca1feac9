"""HTTP client abstraction for testing.

This module provides an ABC for the two kinds of HTTP GET the installer
performs: fetching small text documents (version metadata) and streaming
binary artifacts to disk.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class HttpError(Exception):
    """Raised when an HTTP request fails at the transport or status level."""

    def __init__(self, *, url: str, message: str, status_code: int | None = None) -> None:
        detail = f"HTTP {status_code}: {message}" if status_code is not None else message
        super().__init__(f"GET {url} failed ({detail})")
        self.url = url
        self.status_code = status_code


class HttpClient(ABC):
    """Abstract interface for outbound HTTP GET requests."""

    @abstractmethod
    def get_text(self, url: str, *, timeout: float) -> str:
        """Fetch a URL and return its body decoded as text.

        Args:
            url: URL to fetch
            timeout: Socket timeout in seconds

        Returns:
            Response body as a string

        Raises:
            HttpError: If the request fails or returns an error status
        """
        ...

    @abstractmethod
    def download(self, url: str, destination: Path, *, timeout: float) -> int:
        """Stream a URL to a file, overwriting any existing file.

        Args:
            url: URL to fetch
            destination: File to write the body to
            timeout: Socket timeout in seconds

        Returns:
            Number of bytes written

        Raises:
            HttpError: If the request fails or returns an error status
        """
        ...
