"""Precondition checks that stop the CLI before any work starts.

Each check prints a user-facing error and exits with ExitCode.ERROR when the
machine cannot run the installer.
"""

import logging

from cursor_setup.core.context import CursorSetupContext
from cursor_setup.core.environment import check_os_compatibility, find_missing_tools
from cursor_setup.exit_codes import ExitCode
from cursor_setup.output import error_output, user_output

logger = logging.getLogger(__name__)


class Ensure:
    """Helper class for startup invariants."""

    @staticmethod
    def supported_os(ctx: CursorSetupContext) -> None:
        """Ensure the machine runs Ubuntu or a known derivative.

        Raises:
            SystemExit: If /etc/os-release names an unsupported distribution
        """
        check = check_os_compatibility(ctx.os_release_path)
        logger.debug("Detected OS: %s (compatible=%s)", check.name, check.compatible)
        if not check.compatible:
            error_output(
                f"This installer supports Ubuntu and its derivatives (detected: {check.name})."
            )
            raise SystemExit(int(ExitCode.ERROR))

    @staticmethod
    def required_tools(ctx: CursorSetupContext) -> None:
        """Ensure every external command the installer shells out to is on PATH.

        Raises:
            SystemExit: If any tool is missing
        """
        missing = find_missing_tools(ctx.system)
        if missing:
            error_output(f"Missing required tools: {', '.join(missing)}")
            user_output("Install them with: sudo apt install " + " ".join(_apt_packages(missing)))
            raise SystemExit(int(ExitCode.ERROR))

    @staticmethod
    def supported_system(ctx: CursorSetupContext) -> None:
        Ensure.supported_os(ctx)
        Ensure.required_tools(ctx)


_APT_PACKAGES = {
    "sudo": "sudo",
    "lsof": "lsof",
    "ping": "iputils-ping",
    "apparmor_parser": "apparmor",
}


def _apt_packages(tools: list[str]) -> list[str]:
    return [_APT_PACKAGES.get(tool, tool) for tool in tools]
