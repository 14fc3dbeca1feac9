"""Busy-file detection.

A running Cursor keeps its AppImage open; replacing it underneath the process
is what the install must avoid. Detection polls lsof with exponential backoff
and reports a typed result instead of a bare boolean.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from cursor_setup.gateway.system.abc import System
from cursor_setup.gateway.time.abc import Time

logger = logging.getLogger(__name__)

BACKOFF_FACTOR = 2.0


@dataclass(frozen=True)
class FileFree:
    path: Path


@dataclass(frozen=True)
class FileBusy:
    path: Path
    pids: tuple[int, ...]


@dataclass(frozen=True)
class BusyTimeout:
    path: Path
    pids: tuple[int, ...]
    attempts: int


def check_file(system: System, path: Path) -> FileFree | FileBusy:
    pids = system.find_open_pids(path)
    if pids:
        return FileBusy(path=path, pids=tuple(pids))
    return FileFree(path=path)


def wait_for_release(
    system: System,
    time: Time,
    path: Path,
    *,
    attempts: int,
    initial_delay: float,
    max_delay: float,
) -> FileFree | BusyTimeout:
    """Poll until no process holds `path` open.

    Checks once immediately, then up to `attempts` more times, sleeping
    initial_delay, 2x, 4x... (capped at max_delay) between checks.
    """
    result = check_file(system, path)
    if isinstance(result, FileFree):
        return result

    delay = initial_delay
    for attempt in range(1, attempts + 1):
        logger.debug(
            "%s held open by %s, retry %d/%d in %.1fs",
            path,
            result.pids,
            attempt,
            attempts,
            delay,
        )
        time.sleep(delay)
        result = check_file(system, path)
        if isinstance(result, FileFree):
            return result
        delay = min(delay * BACKOFF_FACTOR, max_delay)

    return BusyTimeout(path=path, pids=result.pids, attempts=attempts)
