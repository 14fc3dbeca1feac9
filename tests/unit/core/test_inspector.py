"""Tests for installed artifact discovery."""

import os
from pathlib import Path

from cursor_setup.core.inspector import (
    InstalledArtifact,
    NoInstallation,
    artifact_name,
    find_installed,
    list_artifacts,
)
from cursor_setup.core.version import AppVersion, UnknownVersion


def _touch(path: Path, mtime: float) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x")
    os.utime(path, (mtime, mtime))
    return path


def test_missing_directory_means_no_installation(tmp_path: Path) -> None:
    assert isinstance(find_installed(tmp_path / ".AppImage"), NoInstallation)


def test_newest_artifact_wins(tmp_path: Path) -> None:
    _touch(tmp_path / "cursor-1.4.0.AppImage", 1_000)
    newest = _touch(tmp_path / "cursor-1.5.6.AppImage", 2_000)

    result = find_installed(tmp_path)

    assert result == InstalledArtifact(path=newest, version=AppVersion(1, 5, 6))


def test_backups_and_temp_files_are_not_artifacts(tmp_path: Path) -> None:
    current = _touch(tmp_path / "cursor-1.5.6.AppImage", 1_000)
    _touch(tmp_path / "cursor-1.5.5.AppImage.backup-20250101-120000", 3_000)
    _touch(tmp_path / ".cursor-1.5.7.AppImage.tmp", 3_000)
    _touch(tmp_path / "wrapper-cursor.sh", 3_000)

    assert list_artifacts(tmp_path) == [current]


def test_artifact_without_parsable_version(tmp_path: Path) -> None:
    _touch(tmp_path / "cursor-1.5.AppImage", 1_000)

    result = find_installed(tmp_path)

    assert isinstance(result, InstalledArtifact)
    assert isinstance(result.version, UnknownVersion)


def test_artifact_name() -> None:
    assert artifact_name(AppVersion(1, 5, 6)) == "cursor-1.5.6.AppImage"
