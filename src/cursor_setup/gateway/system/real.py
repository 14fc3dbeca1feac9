"""Real System implementation using subprocess and os.kill()."""

import logging
import os
import shutil
import signal
import subprocess
from pathlib import Path

from cursor_setup.gateway.system.abc import System

logger = logging.getLogger(__name__)


def _run_with_context(cmd: list[str], *, operation_context: str, stdin: str | None = None) -> str:
    """Run a command, raising RuntimeError that names the operation on failure."""
    logger.debug("Running: %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            input=stdin,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise RuntimeError(f"Failed to {operation_context}: {e}") from e

    if result.returncode != 0:
        stderr = result.stderr.strip()
        raise RuntimeError(
            f"Failed to {operation_context}\n"
            f"Command: {' '.join(cmd)}\n"
            f"Exit code: {result.returncode}\n"
            f"stderr: {stderr}"
        )
    return result.stdout


class RealSystem(System):
    """Production implementation that shells out to ping, lsof and sudo."""

    def which(self, name: str) -> str | None:
        return shutil.which(name)

    def ping(self, host: str, *, timeout_seconds: int) -> bool:
        result = subprocess.run(
            ["ping", "-c", "1", "-W", str(timeout_seconds), host],
            capture_output=True,
            text=True,
            check=False,
        )
        logger.debug("ping %s exited with %d", host, result.returncode)
        return result.returncode == 0

    def find_open_pids(self, path: Path) -> list[int]:
        # lsof exits 1 both when nothing holds the file and on some errors
        result = subprocess.run(
            ["lsof", "-t", "--", str(path)],
            capture_output=True,
            text=True,
            check=False,
        )
        pids = {int(line) for line in result.stdout.split() if line.strip().isdigit()}
        return sorted(pids)

    def terminate(self, pids: list[int]) -> None:
        for pid in pids:
            try:
                os.kill(pid, signal.SIGTERM)
            except ProcessLookupError:
                logger.debug("Process %d already exited", pid)
            except PermissionError:
                _run_with_context(
                    ["sudo", "kill", "-TERM", str(pid)],
                    operation_context=f"terminate process {pid}",
                )

    def sudo_validate(self) -> bool:
        # Not captured: sudo may need to prompt for a password on the terminal
        result = subprocess.run(["sudo", "-v"], check=False)
        return result.returncode == 0

    def sudo_write_file(self, path: Path, content: str) -> None:
        _run_with_context(
            ["sudo", "tee", str(path)],
            operation_context=f"write {path}",
            stdin=content,
        )

    def sudo_symlink(self, target: Path, link: Path) -> None:
        _run_with_context(
            ["sudo", "ln", "-sfn", str(target), str(link)],
            operation_context=f"link {link} -> {target}",
        )

    def reload_apparmor_profile(self, profile_path: Path) -> None:
        _run_with_context(
            ["sudo", "apparmor_parser", "-r", str(profile_path)],
            operation_context=f"reload AppArmor profile {profile_path}",
        )
