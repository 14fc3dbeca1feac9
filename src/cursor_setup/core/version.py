"""Structured application versions.

Cursor releases are plain `major.minor.patch` triples. Parsing goes through
packaging's Version so that anything that is not a plain three-component
release (pre-releases, epochs, local labels) is rejected rather than guessed at.
"""

import re
from dataclasses import dataclass
from typing import Self

from packaging.version import InvalidVersion, Version

# Matches both installed names (cursor-1.5.6.AppImage) and
# downloaded names (Cursor-1.5.6-x86_64.AppImage)
_FILENAME_VERSION_RE = re.compile(r"cursor-(\d+\.\d+\.\d+)", re.IGNORECASE)


@dataclass(frozen=True, order=True)
class AppVersion:
    """A release version compared by integer components."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse a `major.minor.patch` string.

        Raises:
            ValueError: If text is not a plain three-component release
        """
        try:
            parsed = Version(text.strip())
        except InvalidVersion as e:
            raise ValueError(f"Not a version: {text!r}") from e

        if parsed.is_prerelease or parsed.is_postrelease or parsed.local or parsed.epoch:
            raise ValueError(f"Not a plain release version: {text!r}")
        if len(parsed.release) != 3:
            raise ValueError(f"Expected major.minor.patch, got: {text!r}")

        major, minor, patch = parsed.release
        return cls(major=major, minor=minor, patch=patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass(frozen=True)
class UnknownVersion:
    """Sentinel for an artifact whose file name carries no version."""

    def __str__(self) -> str:
        return "unknown"


def extract_version_from_filename(filename: str) -> AppVersion | UnknownVersion:
    """Extract the version embedded in an AppImage file name.

    Args:
        filename: Base name such as `cursor-1.5.6.AppImage`

    Returns:
        The embedded version, or UnknownVersion if the name has none
    """
    match = _FILENAME_VERSION_RE.search(filename)
    if match is None:
        return UnknownVersion()
    try:
        return AppVersion.parse(match.group(1))
    except ValueError:
        return UnknownVersion()
