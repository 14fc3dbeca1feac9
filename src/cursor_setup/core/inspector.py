"""Installed artifact discovery."""

from dataclasses import dataclass
from pathlib import Path

from cursor_setup.core.version import AppVersion, UnknownVersion, extract_version_from_filename

# The "current" artifact family; backups carry a suffix and never match
ARTIFACT_GLOB = "cursor-[0-9]*.AppImage"


@dataclass(frozen=True)
class InstalledArtifact:
    path: Path
    version: AppVersion | UnknownVersion


@dataclass(frozen=True)
class NoInstallation:
    """Sentinel returned when no artifact is present."""


def artifact_name(version: AppVersion) -> str:
    """Return the installed file name for a version."""
    return f"cursor-{version}.AppImage"


def list_artifacts(app_dir: Path) -> list[Path]:
    """List current-family artifacts, most recently modified first."""
    if not app_dir.is_dir():
        return []
    candidates = [p for p in app_dir.glob(ARTIFACT_GLOB) if p.is_file()]
    return sorted(candidates, key=lambda p: p.stat().st_mtime, reverse=True)


def find_installed(app_dir: Path) -> InstalledArtifact | NoInstallation:
    """Return the newest installed artifact and its version.

    The most recently modified file wins when several versions are present.
    """
    artifacts = list_artifacts(app_dir)
    if not artifacts:
        return NoInstallation()
    newest = artifacts[0]
    return InstalledArtifact(path=newest, version=extract_version_from_filename(newest.name))
