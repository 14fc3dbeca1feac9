"""Remote version lookup.

Version metadata is plain text (a changelog page, a version file) somewhere in
which the first "Cursor X.Y.Z" names the latest release. Sources are tried in
order; each gets a bounded number of attempts with a fixed delay.
"""

import logging
import re
from dataclasses import dataclass

from cursor_setup.core.context import CursorSetupContext
from cursor_setup.core.environment import Architecture
from cursor_setup.core.non_ideal_state import (
    MirrorsExhausted,
    NetworkUnreachable,
    VersionFetchFailure,
    VersionNotFound,
)
from cursor_setup.core.version import AppVersion
from cursor_setup.gateway.http.abc import HttpError

logger = logging.getLogger(__name__)

VERSION_TEXT_RE = re.compile(r"Cursor\s+(\d+\.\d+\.\d+)")

PING_TIMEOUT_SECONDS = 3


@dataclass(frozen=True)
class RemoteRelease:
    version: AppVersion
    download_url: str
    source_url: str


def extract_version_from_text(text: str) -> AppVersion | None:
    """Return the first `Cursor X.Y.Z` version found in text, if any."""
    for match in VERSION_TEXT_RE.finditer(text):
        try:
            return AppVersion.parse(match.group(1))
        except ValueError:
            continue
    return None


def build_download_url(template: str, version: AppVersion, architecture: Architecture) -> str:
    """Fill the download URL template for a version and architecture."""
    return template.format(version=version, arch=architecture.arch, machine=architecture.machine)


def _fetch_with_retries(ctx: CursorSetupContext, url: str) -> str | HttpError:
    """Fetch one source, retrying transport errors and too-small bodies."""
    config = ctx.config
    attempts = max(config.fetch_retries, 1)
    last_error = HttpError(url=url, message="not attempted")

    for attempt in range(1, attempts + 1):
        try:
            text = ctx.http.get_text(url, timeout=config.http_timeout)
        except HttpError as e:
            last_error = e
            logger.debug("Attempt %d/%d for %s failed: %s", attempt, attempts, url, e)
        else:
            if len(text.strip()) >= config.min_content_bytes:
                return text
            last_error = HttpError(url=url, message=f"content too small ({len(text)} bytes)")
            logger.debug("Attempt %d/%d for %s returned too little content", attempt, attempts, url)

        if attempt < attempts:
            ctx.time.sleep(config.retry_delay)

    return last_error


def fetch_latest_release(ctx: CursorSetupContext) -> RemoteRelease | VersionFetchFailure:
    """Look up the latest release across the configured sources.

    Returns:
        The latest release, or a non-ideal state describing why none was found
    """
    config = ctx.config

    if config.probe_host:
        if not ctx.system.ping(config.probe_host, timeout_seconds=PING_TIMEOUT_SECONDS):
            logger.debug("Connectivity probe to %s failed", config.probe_host)
            return NetworkUnreachable(host=config.probe_host)

    errors: list[tuple[str, str]] = []
    versionless: list[str] = []

    for url in config.version_urls:
        result = _fetch_with_retries(ctx, url)
        if isinstance(result, HttpError):
            errors.append((url, str(result)))
            continue

        version = extract_version_from_text(result)
        if version is None:
            logger.debug("No version pattern in content from %s", url)
            versionless.append(url)
            continue

        logger.debug("Latest version %s found at %s", version, url)
        return RemoteRelease(
            version=version,
            download_url=build_download_url(
                config.download_url_template, version, ctx.architecture
            ),
            source_url=url,
        )

    if versionless:
        return VersionNotFound(urls=tuple(versionless))
    return MirrorsExhausted(errors=tuple(errors))
