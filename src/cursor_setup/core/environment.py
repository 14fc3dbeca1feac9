"""Environment resolution: real home, language paths, architecture, OS checks."""

import logging
import platform
import pwd
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from cursor_setup.core.config import Language
from cursor_setup.gateway.system.abc import System

logger = logging.getLogger(__name__)

REQUIRED_TOOLS = ("sudo", "lsof", "ping", "apparmor_parser")

SUPPORTED_DISTROS_RE = re.compile(
    r"ubuntu|kubuntu|xubuntu|lubuntu|pop!_os|elementary|zorin|linux mint", re.IGNORECASE
)

OS_RELEASE_PATH = Path("/etc/os-release")
SYSTEM_BIN_DIR = Path("/usr/local/bin")
APPARMOR_DIR = Path("/etc/apparmor.d")

_LANGUAGE_DIRS: dict[str, tuple[str, str]] = {
    "EN": ("Desktop", "Downloads"),
    "ES": ("Escritorio", "Descargas"),
}


@dataclass(frozen=True)
class Architecture:
    """CPU architecture in the two spellings the download URL needs.

    Attributes:
        arch: Short name used in URL paths (x64, arm64)
        machine: Kernel machine name used in file names (x86_64, aarch64)
    """

    arch: str
    machine: str


@dataclass(frozen=True)
class SetupPaths:
    """Every filesystem location the installer reads or writes."""

    real_home: Path
    desktop_dir: Path
    downloads_dir: Path
    app_dir: Path
    icon_path: Path
    user_desktop_file: Path
    system_desktop_file: Path
    wrapper_path: Path
    symlink_path: Path
    apparmor_profile_path: Path

    @property
    def journal_path(self) -> Path:
        return self.app_dir / ".cursor-setup-state.json"


@dataclass(frozen=True)
class OsCheck:
    name: str
    compatible: bool


def resolve_real_home(environ: Mapping[str, str]) -> Path:
    """Return the invoking user's home directory, even under sudo.

    When run through sudo, HOME points at root's home; SUDO_USER names the
    user who actually asked for the install.
    """
    sudo_user = environ.get("SUDO_USER")
    if sudo_user:
        try:
            return Path(pwd.getpwnam(sudo_user).pw_dir)
        except KeyError:
            logger.warning("SUDO_USER=%s has no passwd entry, falling back to HOME", sudo_user)
    home = environ.get("HOME")
    if home:
        return Path(home)
    return Path.home()


def build_paths(
    real_home: Path,
    language: Language,
    *,
    system_bin_dir: Path = SYSTEM_BIN_DIR,
    apparmor_dir: Path = APPARMOR_DIR,
) -> SetupPaths:
    """Derive the filesystem layout for a user and language."""
    desktop_name, downloads_name = _LANGUAGE_DIRS[language]
    desktop_dir = real_home / desktop_name
    app_dir = real_home / ".AppImage"
    return SetupPaths(
        real_home=real_home,
        desktop_dir=desktop_dir,
        downloads_dir=real_home / downloads_name,
        app_dir=app_dir,
        icon_path=real_home / ".local" / "share" / "icons" / "cursor.svg",
        user_desktop_file=desktop_dir / "cursor.desktop",
        system_desktop_file=real_home / ".local" / "share" / "applications" / "cursor.desktop",
        wrapper_path=app_dir / "wrapper-cursor.sh",
        symlink_path=system_bin_dir / "cursor",
        apparmor_profile_path=apparmor_dir / "cursor-appimage",
    )


def detect_architecture(machine: str | None = None) -> Architecture:
    """Map the kernel machine name to download URL components.

    Raises:
        ValueError: If the architecture has no Cursor AppImage build
    """
    raw = (machine if machine is not None else platform.machine()).lower()
    if raw in ("x86_64", "amd64"):
        return Architecture(arch="x64", machine="x86_64")
    if raw in ("aarch64", "arm64"):
        return Architecture(arch="arm64", machine="aarch64")
    raise ValueError(f"Unsupported architecture: {raw}")


def check_os_compatibility(os_release_path: Path = OS_RELEASE_PATH) -> OsCheck:
    """Check /etc/os-release for Ubuntu or a known derivative."""
    if not os_release_path.exists():
        return OsCheck(name="unknown", compatible=False)

    content = os_release_path.read_text(encoding="utf-8", errors="replace")
    name = "unknown"
    for line in content.splitlines():
        if line.startswith("NAME="):
            name = line.split("=", 1)[1].strip().strip('"')
            break
    return OsCheck(name=name, compatible=SUPPORTED_DISTROS_RE.search(content) is not None)


def find_missing_tools(system: System, tools: tuple[str, ...] = REQUIRED_TOOLS) -> list[str]:
    """Return the required executables that are not on PATH."""
    return [tool for tool in tools if system.which(tool) is None]
