"""AppImage installation as an ordered, resumable list of steps.

The steps are not transactional: a failure leaves earlier side effects in
place. Progress is recorded in a small JSON journal next to the artifact so a
later run for the same version can skip what already succeeded.
"""

import json
import logging
import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from pathlib import Path

from cursor_setup.core.busy import BusyTimeout, wait_for_release
from cursor_setup.core.context import CursorSetupContext
from cursor_setup.core.inspector import (
    InstalledArtifact,
    NoInstallation,
    artifact_name,
    find_installed,
    list_artifacts,
)
from cursor_setup.core.integration import (
    apply_apparmor_profile,
    download_icon,
    link_wrapper,
    write_desktop_entries,
    write_wrapper_script,
)
from cursor_setup.core.non_ideal_state import InstallCancelled, InstallFailed, NonIdealState
from cursor_setup.core.version import AppVersion

logger = logging.getLogger(__name__)

STEP_NAMES = (
    "release_busy",
    "backup",
    "copy",
    "prune",
    "desktop",
    "icon",
    "wrapper",
    "symlink",
    "apparmor",
)

# Re-checked on every run; a finished check says nothing about the next run
_UNJOURNALED_STEPS = frozenset({"release_busy"})

BACKUP_MARKER = ".backup-"


@dataclass(frozen=True)
class InstallJournal:
    version: str
    artifact: str
    completed: tuple[str, ...]

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(
            name
            for name in STEP_NAMES
            if name not in self.completed and name not in _UNJOURNALED_STEPS
        )

    def verified(self) -> "InstallJournal":
        """Forget recorded progress if the placed artifact is no longer on disk.

        Every step from `backup` on concerns that artifact, so the install
        restarts from the beginning rather than pruning towards a missing file.
        """
        if "copy" not in self.completed or Path(self.artifact).is_file():
            return self
        logger.warning(
            "Install journal says %s was placed but it is missing; starting over",
            self.artifact,
        )
        return replace(self, completed=())


@dataclass(frozen=True)
class InstallResult:
    artifact: Path
    backup: Path | None
    pruned: tuple[Path, ...]
    skipped_steps: tuple[str, ...]
    icon_downloaded: bool


@dataclass
class _RunState:
    previous: InstalledArtifact | NoInstallation
    backup: Path | None = None
    pruned: list[Path] = field(default_factory=list)
    icon_downloaded: bool = False


def load_journal(path: Path) -> InstallJournal | None:
    """Read the install journal, ignoring it if missing or unreadable."""
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return InstallJournal(
            version=str(data["version"]),
            artifact=str(data["artifact"]),
            completed=tuple(str(step) for step in data["completed"]),
        )
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.warning("Ignoring unreadable install journal %s: %s", path, e)
        return None


def save_journal(path: Path, journal: InstallJournal) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    payload = {
        "version": journal.version,
        "artifact": journal.artifact,
        "completed": list(journal.completed),
    }
    tmp.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    os.replace(tmp, path)


def clear_journal(path: Path) -> None:
    path.unlink(missing_ok=True)


def list_backups(app_dir: Path) -> list[Path]:
    """List artifact backups, newest timestamp first."""
    if not app_dir.is_dir():
        return []
    backups = [p for p in app_dir.glob(f"cursor-*.AppImage{BACKUP_MARKER}*") if p.is_file()]
    return sorted(backups, key=lambda p: p.name.rsplit(BACKUP_MARKER, 1)[1], reverse=True)


def backup_artifact(ctx: CursorSetupContext, artifact: Path) -> Path:
    """Copy the artifact to a timestamped sibling, then prune old backups.

    The copy goes to a hidden temp file first and is renamed into place, so a
    backup path either holds a complete copy or does not exist.
    """
    stamp = ctx.time.now().strftime("%Y%m%d-%H%M%S")
    backup = artifact.with_name(f"{artifact.name}{BACKUP_MARKER}{stamp}")
    tmp = artifact.with_name(f".{backup.name}.tmp")
    shutil.copy2(artifact, tmp)
    os.replace(tmp, backup)

    keep = max(ctx.config.keep_backups, 1)
    for old in list_backups(artifact.parent)[keep:]:
        logger.debug("Removing old backup %s", old)
        old.unlink()
    return backup


def place_artifact(source: Path, target: Path) -> None:
    """Copy source to target through a temp file and mark it executable."""
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_name(f".{target.name}.tmp")
    shutil.copyfile(source, tmp)
    tmp.chmod(0o755)
    os.replace(tmp, target)


def prune_old_artifacts(app_dir: Path, keep: Path) -> list[Path]:
    """Delete every current-family artifact except `keep`."""
    removed: list[Path] = []
    for candidate in list_artifacts(app_dir):
        if candidate != keep:
            candidate.unlink()
            removed.append(candidate)
    return removed


def _release_busy(ctx: CursorSetupContext, state: _RunState) -> NonIdealState | None:
    if not isinstance(state.previous, InstalledArtifact):
        return None

    config = ctx.config
    path = state.previous.path
    result = wait_for_release(
        ctx.system,
        ctx.time,
        path,
        attempts=config.busy_retries,
        initial_delay=config.busy_initial_delay,
        max_delay=config.busy_max_delay,
    )
    if not isinstance(result, BusyTimeout):
        return None

    pid_list = ", ".join(str(pid) for pid in result.pids)
    if not ctx.console.is_stdin_interactive():
        return InstallFailed(step="release_busy", reason=f"{path} is in use by PID(s) {pid_list}")
    if not ctx.console.confirm(
        f"Cursor is still running (PID(s) {pid_list}). Terminate it?", default=False
    ):
        return InstallCancelled(reason="Cursor is still running")

    ctx.system.terminate(list(result.pids))
    after = wait_for_release(
        ctx.system,
        ctx.time,
        path,
        attempts=config.busy_retries,
        initial_delay=config.busy_initial_delay,
        max_delay=config.busy_max_delay,
    )
    if isinstance(after, BusyTimeout):
        pids = ", ".join(str(pid) for pid in after.pids)
        return InstallFailed(step="release_busy", reason=f"{path} is still in use by PID(s) {pids}")
    return None


def install_artifact(
    ctx: CursorSetupContext,
    source: Path,
    version: AppVersion,
    *,
    resume: bool,
) -> InstallResult | InstallFailed | InstallCancelled:
    """Install `source` as the current Cursor AppImage.

    Args:
        ctx: Application context
        source: Validated AppImage to install
        version: Version the artifact carries
        resume: Skip steps a previous run for the same version completed

    Returns:
        InstallResult on success, otherwise the failure or cancellation
    """
    paths = ctx.paths
    target = paths.app_dir / artifact_name(version)

    completed: list[str] = []
    journal = load_journal(paths.journal_path)
    if (
        resume
        and journal is not None
        and journal.version == str(version)
        and journal.artifact == str(target)
    ):
        completed = list(journal.verified().completed)
        logger.debug("Resuming install of %s, already done: %s", version, completed)

    state = _RunState(previous=find_installed(paths.app_dir))

    def backup() -> None:
        if isinstance(state.previous, InstalledArtifact):
            state.backup = backup_artifact(ctx, state.previous.path)

    def copy() -> None:
        place_artifact(source, target)

    def prune() -> None:
        state.pruned = prune_old_artifacts(paths.app_dir, target)

    def desktop() -> None:
        write_desktop_entries(ctx, target)

    def icon() -> None:
        state.icon_downloaded = download_icon(ctx)

    def wrapper() -> None:
        write_wrapper_script(ctx, target)

    steps: list[tuple[str, Callable[[], NonIdealState | None]]] = [
        ("release_busy", lambda: _release_busy(ctx, state)),
        ("backup", backup),
        ("copy", copy),
        ("prune", prune),
        ("desktop", desktop),
        ("icon", icon),
        ("wrapper", wrapper),
        ("symlink", lambda: link_wrapper(ctx)),
        ("apparmor", lambda: apply_apparmor_profile(ctx)),
    ]

    skipped: list[str] = []
    for name, run in steps:
        if name in completed:
            skipped.append(name)
            continue

        logger.debug("Install step: %s", name)
        try:
            failure = run()
        except (OSError, RuntimeError) as e:
            failure = InstallFailed(step=name, reason=str(e))
        if isinstance(failure, (InstallFailed, InstallCancelled)):
            return failure

        if name not in _UNJOURNALED_STEPS:
            completed.append(name)
            save_journal(
                paths.journal_path,
                InstallJournal(
                    version=str(version), artifact=str(target), completed=tuple(completed)
                ),
            )

    clear_journal(paths.journal_path)
    return InstallResult(
        artifact=target,
        backup=state.backup,
        pruned=tuple(state.pruned),
        skipped_steps=tuple(skipped),
        icon_downloaded=state.icon_downloaded,
    )


def create_shortcut(ctx: CursorSetupContext) -> list[Path] | NoInstallation:
    """Regenerate the desktop entries and icon for the installed artifact."""
    installed = find_installed(ctx.paths.app_dir)
    if isinstance(installed, NoInstallation):
        return installed
    written = write_desktop_entries(ctx, installed.path)
    download_icon(ctx)
    return written
