"""Fake System implementation for testing.

FakeSystem keeps privileged writes, symlinks and process state in memory so
the install flow can be exercised without sudo or real processes.
"""

from pathlib import Path

from cursor_setup.gateway.system.abc import System


class FakeSystem(System):
    """In-memory fake that tracks mutations.

    This class has NO public setup methods. All state is provided via constructor.

    Open-file state: the configured PIDs hold every checked file open until
    either terminate() is called or `release_after_checks` lookups have been made.
    """

    def __init__(
        self,
        *,
        available_tools: set[str] | None = None,
        ping_succeeds: bool = True,
        open_pids: list[int] | None = None,
        release_after_checks: int | None = None,
        sudo_available: bool = True,
        failing_operations: set[str] | None = None,
    ) -> None:
        """Create FakeSystem with configured state.

        Args:
            available_tools: Executables which() reports (defaults to the required set)
            ping_succeeds: Result returned by ping()
            open_pids: PIDs reported as holding files open
            release_after_checks: Stop reporting open PIDs after this many lookups
            sudo_available: Result returned by sudo_validate()
            failing_operations: Names of privileged operations that raise RuntimeError
                ("write", "symlink", "apparmor")
        """
        self._available_tools = (
            available_tools
            if available_tools is not None
            else {"sudo", "lsof", "ping", "apparmor_parser"}
        )
        self._ping_succeeds = ping_succeeds
        self._open_pids = list(open_pids) if open_pids is not None else []
        self._release_after_checks = release_after_checks
        self._sudo_available = sudo_available
        self._failing_operations = failing_operations if failing_operations is not None else set()

        self._pinged_hosts: list[str] = []
        self._open_file_checks: list[Path] = []
        self._terminated_pids: list[int] = []
        self._written_files: dict[Path, str] = {}
        self._symlinks: dict[Path, Path] = {}
        self._reloaded_profiles: list[Path] = []

    # --- Test assertions ---

    @property
    def pinged_hosts(self) -> list[str]:
        """Hosts passed to ping(). This property is for test assertions only."""
        return self._pinged_hosts.copy()

    @property
    def open_file_checks(self) -> list[Path]:
        """Paths passed to find_open_pids(). This property is for test assertions only."""
        return self._open_file_checks.copy()

    @property
    def terminated_pids(self) -> list[int]:
        """PIDs passed to terminate(). This property is for test assertions only."""
        return self._terminated_pids.copy()

    @property
    def written_files(self) -> dict[Path, str]:
        """Privileged file writes keyed by path. This property is for test assertions only."""
        return dict(self._written_files)

    @property
    def symlinks(self) -> dict[Path, Path]:
        """Privileged symlinks as link -> target. This property is for test assertions only."""
        return dict(self._symlinks)

    @property
    def reloaded_profiles(self) -> list[Path]:
        """Profiles passed to reload. This property is for test assertions only."""
        return self._reloaded_profiles.copy()

    # --- System operations ---

    def which(self, name: str) -> str | None:
        if name in self._available_tools:
            return f"/usr/bin/{name}"
        return None

    def ping(self, host: str, *, timeout_seconds: int) -> bool:
        self._pinged_hosts.append(host)
        return self._ping_succeeds

    def find_open_pids(self, path: Path) -> list[int]:
        self._open_file_checks.append(path)
        if (
            self._release_after_checks is not None
            and len(self._open_file_checks) > self._release_after_checks
        ):
            self._open_pids = []
        return sorted(self._open_pids)

    def terminate(self, pids: list[int]) -> None:
        self._terminated_pids.extend(pids)
        self._open_pids = [pid for pid in self._open_pids if pid not in pids]

    def sudo_validate(self) -> bool:
        return self._sudo_available

    def sudo_write_file(self, path: Path, content: str) -> None:
        if "write" in self._failing_operations:
            raise RuntimeError(f"Failed to write {path}: permission denied")
        self._written_files[path] = content

    def sudo_symlink(self, target: Path, link: Path) -> None:
        if "symlink" in self._failing_operations:
            raise RuntimeError(f"Failed to link {link} -> {target}: permission denied")
        self._symlinks[link] = target

    def reload_apparmor_profile(self, profile_path: Path) -> None:
        if "apparmor" in self._failing_operations:
            raise RuntimeError(f"apparmor_parser failed for {profile_path}")
        self._reloaded_profiles.append(profile_path)
