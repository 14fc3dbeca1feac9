"""Check, confirm, download and install: the end-to-end update flow."""

import logging
from pathlib import Path

from cursor_setup.core.context import CursorSetupContext
from cursor_setup.core.decision import Decision, InstallAction, decide
from cursor_setup.core.download import download_release, validate_artifact
from cursor_setup.core.inspector import InstalledArtifact, NoInstallation, find_installed
from cursor_setup.core.installer import (
    InstallJournal,
    InstallResult,
    install_artifact,
    load_journal,
)
from cursor_setup.core.non_ideal_state import InstallCancelled, NonIdealState
from cursor_setup.core.remote import RemoteRelease, fetch_latest_release
from cursor_setup.core.version import UnknownVersion, extract_version_from_filename
from cursor_setup.exit_codes import ExitCode
from cursor_setup.output import error_output, success_output, user_output, warning_output

logger = logging.getLogger(__name__)


def _ask(ctx: CursorSetupContext, question: str, *, assume_yes: bool, default: bool) -> bool:
    if assume_yes:
        return True
    if not ctx.console.is_stdin_interactive():
        logger.debug("Not interactive, treating '%s' as declined", question)
        return False
    return ctx.console.confirm(question, default=default)


def _describe_installed(installed: InstalledArtifact | NoInstallation) -> None:
    if isinstance(installed, NoInstallation):
        user_output("No installed version detected.")
    else:
        user_output(f"Installed version detected: {installed.version} ({installed.path})")


def _confirm(
    ctx: CursorSetupContext,
    decision: Decision,
    *,
    assume_yes: bool,
    force: bool,
    resumable: tuple[str, ...],
) -> ExitCode | None:
    """Ask the operator to go ahead. Returns None to proceed, else the exit code."""
    latest = decision.latest
    if latest is None:
        error_output(decision.message)
        return ExitCode.ERROR

    if resumable:
        question = (
            f"A previous installation of {latest.version} did not finish "
            f"(pending: {', '.join(resumable)}). Finish it now?"
        )
        if _ask(ctx, question, assume_yes=assume_yes, default=True):
            return None
        user_output("Installation cancelled.")
        return ExitCode.CANCELLED

    if decision.action == InstallAction.UP_TO_DATE:
        user_output(decision.message)
        if force:
            return None
        if assume_yes or not ctx.console.is_stdin_interactive():
            return ExitCode.NO_ACTION
        question = f"Version {latest.version} is already installed. Reinstall?"
        if ctx.console.confirm(question, default=False):
            return None
        user_output("Nothing to do.")
        return ExitCode.NO_ACTION

    installed = decision.installed
    installed_version = installed.version if isinstance(installed, InstalledArtifact) else None
    if decision.action == InstallAction.INSTALL:
        question = f"No previous installation detected. Install version {latest.version}?"
    elif decision.is_downgrade:
        question = (
            f"Remote version ({latest.version}) is older than installed "
            f"({installed_version}). Install it anyway?"
        )
    else:
        question = f"Update from version {installed_version} to {latest.version}?"

    user_output(decision.message)
    if _ask(ctx, question, assume_yes=assume_yes, default=True):
        return None
    user_output("Installation cancelled.")
    return ExitCode.CANCELLED


def _resumable_journal(ctx: CursorSetupContext, release: RemoteRelease) -> InstallJournal | None:
    journal = load_journal(ctx.paths.journal_path)
    if journal is None or journal.version != str(release.version):
        return None
    return journal.verified()


def _report_install(ctx: CursorSetupContext, result: InstallResult) -> None:
    success_output(f"AppImage installed to {result.artifact}")
    if result.backup is not None:
        user_output(f"  Previous version backed up to {result.backup}")
    for pruned in result.pruned:
        user_output(f"  Removed older version {pruned.name}")
    user_output(
        f"  Desktop shortcut: {ctx.paths.user_desktop_file} and {ctx.paths.system_desktop_file}"
    )
    user_output(f"  Command: {ctx.paths.symlink_path} -> {ctx.paths.wrapper_path}")
    user_output(f"  AppArmor profile: {ctx.paths.apparmor_profile_path}")
    if not result.icon_downloaded:
        warning_output("Icon could not be downloaded; the shortcut will use a generic icon.")


def _run_install(
    ctx: CursorSetupContext, source: Path, release: RemoteRelease, *, resume: bool
) -> ExitCode:
    result = install_artifact(ctx, source, release.version, resume=resume)
    if isinstance(result, InstallCancelled):
        user_output(result.message)
        return ExitCode.CANCELLED
    if isinstance(result, NonIdealState):
        error_output(result.message)
        user_output("Run the installer again to finish the remaining steps.")
        return ExitCode.ERROR
    _report_install(ctx, result)
    return ExitCode.SUCCESS


def check_and_install(ctx: CursorSetupContext, *, assume_yes: bool, force: bool) -> ExitCode:
    """Compare the installed version with the latest release and act on it."""
    installed = find_installed(ctx.paths.app_dir)
    _describe_installed(installed)

    while True:
        user_output("Checking for the latest version...")
        release = fetch_latest_release(ctx)
        if not isinstance(release, NonIdealState):
            break
        error_output(release.message)
        if assume_yes or not ctx.console.is_stdin_interactive():
            return ExitCode.ERROR
        if not ctx.console.confirm("Retry?", default=True):
            return ExitCode.ERROR

    user_output(f"Latest version available: {release.version}")
    decision = decide(installed, release)
    logger.debug("Decision: %s", decision.action.value)

    journal = _resumable_journal(ctx, release)
    resumable = journal.pending if journal is not None else ()
    stop = _confirm(ctx, decision, assume_yes=assume_yes, force=force, resumable=resumable)
    if stop is not None:
        return stop

    # Nothing left to download if a resumed run already placed the artifact
    if journal is not None and resumable and "copy" not in resumable:
        return _run_install(ctx, Path(journal.artifact), release, resume=True)

    user_output(f"Downloading {release.download_url}")
    downloaded = download_release(ctx, release)
    if isinstance(downloaded, NonIdealState):
        error_output(downloaded.message)
        return ExitCode.ERROR
    success_output(f"Downloaded {downloaded}")

    return _run_install(ctx, downloaded, release, resume=bool(resumable))


def resolve_local_file(ctx: CursorSetupContext, file_arg: str) -> Path:
    """Resolve a bare file name inside the Downloads directory."""
    path = Path(file_arg).expanduser()
    if not path.is_absolute() and path.parent == Path("."):
        return ctx.paths.downloads_dir / path
    return path.resolve()


def install_local_file(ctx: CursorSetupContext, file_arg: str, *, assume_yes: bool) -> ExitCode:
    """Install an AppImage the operator already downloaded."""
    path = resolve_local_file(ctx, file_arg)
    if not path.is_file():
        error_output(f"AppImage file not found at: {path}")
        user_output(
            f"Enter only the file name (e.g. Cursor-1.5.6-x86_64.AppImage) located in "
            f"{ctx.paths.downloads_dir}, or a full path."
        )
        return ExitCode.ERROR

    version = extract_version_from_filename(path.name)
    if isinstance(version, UnknownVersion):
        error_output(f"Cannot determine the version from the file name: {path.name}")
        return ExitCode.ERROR

    reason = validate_artifact(
        path,
        min_bytes=ctx.config.min_artifact_bytes,
        sniff_file_type=ctx.config.sniff_file_type,
    )
    if reason is not None:
        error_output(f"{path} is not a usable AppImage: {reason}")
        return ExitCode.ERROR

    installed = find_installed(ctx.paths.app_dir)
    _describe_installed(installed)
    release = RemoteRelease(version=version, download_url=path.as_uri(), source_url=str(path))
    decision = decide(installed, release)

    journal = _resumable_journal(ctx, release)
    resumable = journal.pending if journal is not None else ()
    stop = _confirm(ctx, decision, assume_yes=assume_yes, force=False, resumable=resumable)
    if stop is not None:
        return stop
    return _run_install(ctx, path, release, resume=bool(resumable))

