"""Tests for the install and install-file commands."""

from pathlib import Path

from click.testing import CliRunner

from cursor_setup.cli.cli import cli
from cursor_setup.core.inspector import list_artifacts
from cursor_setup.core.installer import InstallJournal, list_backups, load_journal, save_journal
from cursor_setup.exit_codes import ExitCode
from cursor_setup.gateway.console.fake import FakeConsole
from cursor_setup.gateway.http.abc import HttpError
from cursor_setup.gateway.http.fake import FakeHttpClient
from cursor_setup.gateway.system.fake import FakeSystem
from tests.test_utils.context_builders import (
    CHANGELOG_URL,
    ICON_URL,
    appimage_bytes,
    build_test_context,
    changelog_body,
    download_url,
    make_config,
    write_installed_artifact,
)


def _release_http(version: str) -> FakeHttpClient:
    return FakeHttpClient(
        text_responses={CHANGELOG_URL: changelog_body(version)},
        downloads={download_url(version): appimage_bytes(), ICON_URL: b"<svg/>"},
    )


def test_install_yes_installs_latest(tmp_path: Path) -> None:
    http = _release_http("1.5.6")
    ctx = build_test_context(tmp_path, http=http, console=FakeConsole(is_interactive=False))

    result = CliRunner().invoke(cli, ["install", "--yes"], obj=ctx)

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert list_artifacts(ctx.paths.app_dir) == [ctx.paths.app_dir / "cursor-1.5.6.AppImage"]
    assert "Latest version available: 1.5.6" in result.output
    assert "AppImage installed to" in result.output


def test_install_updates_and_backs_up(tmp_path: Path) -> None:
    console = FakeConsole(is_interactive=True, confirm_responses=[True])
    ctx = build_test_context(tmp_path, http=_release_http("1.5.6"), console=console)
    write_installed_artifact(ctx, "1.4.0")

    result = CliRunner().invoke(cli, ["install"], obj=ctx)

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert console.confirm_prompts == ["Update from version 1.4.0 to 1.5.6?"]
    assert list_artifacts(ctx.paths.app_dir) == [ctx.paths.app_dir / "cursor-1.5.6.AppImage"]
    assert len(list_backups(ctx.paths.app_dir)) == 1


def test_install_up_to_date_does_nothing(tmp_path: Path) -> None:
    http = _release_http("1.5.6")
    ctx = build_test_context(tmp_path, http=http)
    write_installed_artifact(ctx, "1.5.6")

    result = CliRunner().invoke(cli, ["install", "--yes"], obj=ctx)

    assert result.exit_code == ExitCode.NO_ACTION
    assert "Version 1.5.6 is already installed." in result.output
    assert http.downloaded == []


def test_install_force_reinstalls_current_version(tmp_path: Path) -> None:
    http = _release_http("1.5.6")
    ctx = build_test_context(tmp_path, http=http)
    write_installed_artifact(ctx, "1.5.6")

    result = CliRunner().invoke(cli, ["install", "--yes", "--force"], obj=ctx)

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert (download_url("1.5.6"), ctx.paths.downloads_dir / "Cursor-1.5.6-x86_64.AppImage") in (
        http.downloaded
    )
    assert len(list_backups(ctx.paths.app_dir)) == 1


def test_install_declined_is_cancelled(tmp_path: Path) -> None:
    console = FakeConsole(is_interactive=True, confirm_responses=[False])
    http = _release_http("1.5.6")
    ctx = build_test_context(tmp_path, http=http, console=console)

    result = CliRunner().invoke(cli, ["install"], obj=ctx)

    assert result.exit_code == ExitCode.CANCELLED
    assert http.downloaded == []


def test_install_without_terminal_and_without_yes_is_cancelled(tmp_path: Path) -> None:
    ctx = build_test_context(
        tmp_path, http=_release_http("1.5.6"), console=FakeConsole(is_interactive=False)
    )

    result = CliRunner().invoke(cli, ["install"], obj=ctx)

    assert result.exit_code == ExitCode.CANCELLED


def test_install_version_not_found_downloads_nothing(tmp_path: Path) -> None:
    body = "<html>" + "maintenance " * 10 + "</html>"
    http = FakeHttpClient(text_responses={CHANGELOG_URL: body})
    ctx = build_test_context(tmp_path, http=http)

    result = CliRunner().invoke(cli, ["install", "--yes"], obj=ctx)

    assert result.exit_code == ExitCode.ERROR
    assert "No version string found" in result.output
    assert http.downloaded == []


def test_install_retries_fetch_when_asked(tmp_path: Path) -> None:
    http = FakeHttpClient(
        text_responses={
            CHANGELOG_URL: [
                HttpError(url=CHANGELOG_URL, message="timed out"),
                changelog_body("1.5.6"),
            ]
        },
        downloads={download_url("1.5.6"): appimage_bytes()},
    )
    console = FakeConsole(is_interactive=True, confirm_responses=[True, True])
    ctx = build_test_context(
        tmp_path, http=http, console=console, config=make_config(fetch_retries=1)
    )

    result = CliRunner().invoke(cli, ["install"], obj=ctx)

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert console.confirm_prompts[0] == "Retry?"


def test_install_undersized_download_fails(tmp_path: Path) -> None:
    http = FakeHttpClient(
        text_responses={CHANGELOG_URL: changelog_body("1.5.6")},
        downloads={download_url("1.5.6"): b"\x7fELF"},
    )
    ctx = build_test_context(tmp_path, http=http)

    result = CliRunner().invoke(cli, ["install", "--yes"], obj=ctx)

    assert result.exit_code == ExitCode.ERROR
    assert "too small" in result.output
    assert list(ctx.paths.downloads_dir.iterdir()) == []
    assert list_artifacts(ctx.paths.app_dir) == []


def test_failed_install_resumes_without_downloading_again(tmp_path: Path) -> None:
    first = build_test_context(
        tmp_path,
        http=_release_http("1.5.6"),
        system=FakeSystem(failing_operations={"symlink"}),
    )
    failed = CliRunner().invoke(cli, ["install", "--yes"], obj=first)

    assert failed.exit_code == ExitCode.ERROR
    assert "Install step 'symlink' failed" in failed.output
    journal = load_journal(first.paths.journal_path)
    assert journal is not None
    assert journal.pending == ("symlink", "apparmor")

    http = _release_http("1.5.6")
    system = FakeSystem()
    second = build_test_context(tmp_path, http=http, system=system)
    resumed = CliRunner().invoke(cli, ["install", "--yes"], obj=second)

    assert resumed.exit_code == ExitCode.SUCCESS, resumed.output
    assert http.downloaded == []
    assert system.symlinks == {second.paths.symlink_path: second.paths.wrapper_path}
    assert not second.paths.journal_path.exists()


def test_install_file_resolves_bare_name_in_downloads(tmp_path: Path) -> None:
    ctx = build_test_context(tmp_path)
    ctx.paths.downloads_dir.mkdir(parents=True)
    local = ctx.paths.downloads_dir / "Cursor-1.6.0-x86_64.AppImage"
    local.write_bytes(appimage_bytes())

    result = CliRunner().invoke(
        cli, ["install-file", "Cursor-1.6.0-x86_64.AppImage", "--yes"], obj=ctx
    )

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert list_artifacts(ctx.paths.app_dir) == [ctx.paths.app_dir / "cursor-1.6.0.AppImage"]
    assert local.exists()


def test_install_file_missing(tmp_path: Path) -> None:
    ctx = build_test_context(tmp_path)

    result = CliRunner().invoke(cli, ["install-file", "Cursor-1.6.0-x86_64.AppImage"], obj=ctx)

    assert result.exit_code == ExitCode.ERROR
    assert "AppImage file not found" in result.output


def test_install_file_without_version_in_name(tmp_path: Path) -> None:
    local = tmp_path / "cursor.AppImage"
    local.write_bytes(appimage_bytes())
    ctx = build_test_context(tmp_path)

    result = CliRunner().invoke(cli, ["install-file", str(local), "--yes"], obj=ctx)

    assert result.exit_code == ExitCode.ERROR
    assert "Cannot determine the version" in result.output


def test_install_file_rejects_invalid_artifact_and_keeps_it(tmp_path: Path) -> None:
    local = tmp_path / "Cursor-1.6.0-x86_64.AppImage"
    local.write_bytes(b"<html>" * 500)
    ctx = build_test_context(tmp_path)

    result = CliRunner().invoke(cli, ["install-file", str(local), "--yes"], obj=ctx)

    assert result.exit_code == ExitCode.ERROR
    assert "not an ELF executable" in result.output
    assert local.exists()


def test_unsupported_os_exits_with_error(tmp_path: Path) -> None:
    http = _release_http("1.5.6")
    ctx = build_test_context(tmp_path, http=http, os_release='NAME="Fedora Linux"\nID=fedora\n')

    result = CliRunner().invoke(cli, ["install", "--yes"], obj=ctx)

    assert result.exit_code == ExitCode.ERROR
    assert "Fedora Linux" in result.output
    assert http.requested_urls == []


def test_missing_tools_exit_with_error(tmp_path: Path) -> None:
    ctx = build_test_context(tmp_path, system=FakeSystem(available_tools={"sudo", "ping"}))

    result = CliRunner().invoke(cli, ["install", "--yes"], obj=ctx)

    assert result.exit_code == ExitCode.ERROR
    assert "Missing required tools: lsof, apparmor_parser" in result.output


def test_resume_with_missing_artifact_downloads_again(tmp_path: Path) -> None:
    http = _release_http("1.5.6")
    ctx = build_test_context(tmp_path, http=http)
    write_installed_artifact(ctx, "1.5.5")
    target = ctx.paths.app_dir / "cursor-1.5.6.AppImage"
    save_journal(
        ctx.paths.journal_path,
        InstallJournal(version="1.5.6", artifact=str(target), completed=("backup", "copy")),
    )

    result = CliRunner().invoke(cli, ["install", "--yes"], obj=ctx)

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert (download_url("1.5.6"), ctx.paths.downloads_dir / "Cursor-1.5.6-x86_64.AppImage") in (
        http.downloaded
    )
    assert list_artifacts(ctx.paths.app_dir) == [target]
    assert len(list_backups(ctx.paths.app_dir)) == 1
    assert f"Exec={target} --no-sandbox" in ctx.paths.user_desktop_file.read_text()
    assert not ctx.paths.journal_path.exists()
