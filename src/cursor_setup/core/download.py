"""Artifact download and validation."""

import logging
import stat
from pathlib import Path

from cursor_setup.core.context import CursorSetupContext
from cursor_setup.core.non_ideal_state import DownloadFailed
from cursor_setup.core.remote import RemoteRelease
from cursor_setup.gateway.http.abc import HttpError

logger = logging.getLogger(__name__)

ELF_MAGIC = b"\x7fELF"


def download_filename(release: RemoteRelease, machine: str) -> str:
    return f"Cursor-{release.version}-{machine}.AppImage"


def validate_artifact(path: Path, *, min_bytes: int, sniff_file_type: bool) -> str | None:
    """Check a downloaded AppImage, setting the executable bit if missing.

    Args:
        path: File to check
        min_bytes: Smallest size considered a complete download
        sniff_file_type: Whether to require the ELF magic number

    Returns:
        None if the file is usable, otherwise the reason it is not
    """
    if not path.is_file():
        return "file is missing"

    size = path.stat().st_size
    if size == 0:
        return "file is empty"
    if size < min_bytes:
        return f"file is too small ({size} bytes, expected at least {min_bytes})"

    if sniff_file_type:
        with path.open("rb") as f:
            header = f.read(len(ELF_MAGIC))
        if header != ELF_MAGIC:
            return "file is not an ELF executable"

    mode = path.stat().st_mode
    if not mode & stat.S_IXUSR:
        path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        logger.debug("Set executable bit on %s", path)

    return None


def validate_or_discard(
    ctx: CursorSetupContext, path: Path, *, source: str
) -> Path | DownloadFailed:
    """Validate an artifact, deleting it if it fails any check."""
    reason = validate_artifact(
        path,
        min_bytes=ctx.config.min_artifact_bytes,
        sniff_file_type=ctx.config.sniff_file_type,
    )
    if reason is not None:
        path.unlink(missing_ok=True)
        return DownloadFailed(url=source, reason=reason)
    return path


def download_release(ctx: CursorSetupContext, release: RemoteRelease) -> Path | DownloadFailed:
    """Download a release into the Downloads directory and validate it.

    Any existing file with the same name is replaced. A failed or invalid
    download leaves no file behind.
    """
    downloads_dir = ctx.paths.downloads_dir
    downloads_dir.mkdir(parents=True, exist_ok=True)
    destination = downloads_dir / download_filename(release, ctx.architecture.machine)

    if destination.exists():
        logger.debug("Removing existing %s", destination)
        destination.unlink()

    try:
        ctx.http.download(release.download_url, destination, timeout=ctx.config.http_timeout)
    except (HttpError, OSError) as e:
        destination.unlink(missing_ok=True)
        return DownloadFailed(url=release.download_url, reason=str(e))

    return validate_or_discard(ctx, destination, source=release.download_url)
