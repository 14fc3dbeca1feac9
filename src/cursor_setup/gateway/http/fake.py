"""Fake HttpClient implementation for testing.

FakeHttpClient serves canned responses from memory, enabling fast and
deterministic tests without network access.
"""

from pathlib import Path

from cursor_setup.gateway.http.abc import HttpClient, HttpError


class FakeHttpClient(HttpClient):
    """In-memory fake that serves configured bodies and records requests.

    This class has NO public setup methods. All state is provided via constructor.

    A response value may be a list, in which case successive requests for the
    same URL consume it in order (the last entry repeats). An HttpError value is
    raised instead of returned.
    """

    def __init__(
        self,
        *,
        text_responses: dict[str, str | HttpError | list[str | HttpError]] | None = None,
        downloads: dict[str, bytes | HttpError] | None = None,
    ) -> None:
        """Create FakeHttpClient with canned responses.

        Args:
            text_responses: Mapping of URL to body (or error) for get_text()
            downloads: Mapping of URL to payload (or error) for download()
        """
        self._text_responses = dict(text_responses) if text_responses is not None else {}
        self._downloads = dict(downloads) if downloads is not None else {}
        self._requested_urls: list[str] = []
        self._downloaded: list[tuple[str, Path]] = []

    @property
    def requested_urls(self) -> list[str]:
        """Get the URLs passed to get_text(), in order.

        This property is for test assertions only.
        """
        return self._requested_urls.copy()

    @property
    def downloaded(self) -> list[tuple[str, Path]]:
        """Get the (url, destination) pairs passed to download().

        This property is for test assertions only.
        """
        return self._downloaded.copy()

    def get_text(self, url: str, *, timeout: float) -> str:
        self._requested_urls.append(url)
        if url not in self._text_responses:
            raise HttpError(url=url, message="no route to fake host")

        response = self._text_responses[url]
        if isinstance(response, list):
            current = response[0]
            if len(response) > 1:
                self._text_responses[url] = response[1:]
            response = current

        if isinstance(response, HttpError):
            raise response
        return response

    def download(self, url: str, destination: Path, *, timeout: float) -> int:
        self._downloaded.append((url, destination))
        if url not in self._downloads:
            raise HttpError(url=url, message="not found", status_code=404)

        payload = self._downloads[url]
        if isinstance(payload, HttpError):
            raise payload
        destination.write_bytes(payload)
        return len(payload)
