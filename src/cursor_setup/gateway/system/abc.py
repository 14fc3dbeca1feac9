"""System operations abstraction for testing.

This module provides an ABC for everything the installer does outside the
user's own files: tool discovery, connectivity probing, open-file detection,
process termination, and the sudo-backed writes into system directories.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class System(ABC):
    """Abstract system operations for dependency injection."""

    @abstractmethod
    def which(self, name: str) -> str | None:
        """Locate an executable on PATH.

        Args:
            name: Executable name

        Returns:
            Absolute path if found, None otherwise
        """
        ...

    @abstractmethod
    def ping(self, host: str, *, timeout_seconds: int) -> bool:
        """Send a single ICMP echo request.

        Args:
            host: Hostname or IP address to probe
            timeout_seconds: How long to wait for a reply

        Returns:
            True if the host answered, False otherwise
        """
        ...

    @abstractmethod
    def find_open_pids(self, path: Path) -> list[int]:
        """List processes holding a file open.

        Args:
            path: File to check

        Returns:
            Sorted PIDs with the file open (empty if none)
        """
        ...

    @abstractmethod
    def terminate(self, pids: list[int]) -> None:
        """Send SIGTERM to each process.

        Args:
            pids: Processes to terminate
        """
        ...

    @abstractmethod
    def sudo_validate(self) -> bool:
        """Make sure sudo credentials are available, prompting if needed.

        Returns:
            True if sudo can be used, False otherwise
        """
        ...

    @abstractmethod
    def sudo_write_file(self, path: Path, content: str) -> None:
        """Write a root-owned file.

        Raises:
            RuntimeError: If the privileged write fails
        """
        ...

    @abstractmethod
    def sudo_symlink(self, target: Path, link: Path) -> None:
        """Create or replace a symlink in a root-owned directory.

        Raises:
            RuntimeError: If the privileged command fails
        """
        ...

    @abstractmethod
    def reload_apparmor_profile(self, profile_path: Path) -> None:
        """Replace the loaded AppArmor profile with the file's contents.

        Raises:
            RuntimeError: If apparmor_parser fails
        """
        ...
