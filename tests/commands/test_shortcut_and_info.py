"""Tests for the shortcut and info commands."""

from pathlib import Path

from click.testing import CliRunner

from cursor_setup.cli.cli import cli
from cursor_setup.core.installer import InstallJournal, save_journal
from cursor_setup.exit_codes import ExitCode
from cursor_setup.gateway.http.fake import FakeHttpClient
from tests.test_utils.context_builders import ICON_URL, build_test_context, write_installed_artifact


def test_shortcut_without_installation(tmp_path: Path) -> None:
    ctx = build_test_context(tmp_path)

    result = CliRunner().invoke(cli, ["shortcut"], obj=ctx)

    assert result.exit_code == ExitCode.ERROR
    assert "No Cursor AppImage found" in result.output
    assert not ctx.paths.user_desktop_file.exists()


def test_shortcut_regenerates_entries_and_icon(tmp_path: Path) -> None:
    ctx = build_test_context(tmp_path, http=FakeHttpClient(downloads={ICON_URL: b"<svg/>"}))
    artifact = write_installed_artifact(ctx, "1.5.6")

    result = CliRunner().invoke(cli, ["shortcut"], obj=ctx)

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert f"Exec={artifact} --no-sandbox" in ctx.paths.system_desktop_file.read_text()
    assert ctx.paths.icon_path.read_bytes() == b"<svg/>"


def test_info_without_installation(tmp_path: Path) -> None:
    ctx = build_test_context(tmp_path)

    result = CliRunner().invoke(cli, ["info"], obj=ctx)

    assert result.exit_code == ExitCode.SUCCESS
    assert "not installed" in result.output
    assert "x64 (x86_64)" in result.output


def test_info_reports_version_and_pending_steps(tmp_path: Path) -> None:
    ctx = build_test_context(tmp_path)
    artifact = write_installed_artifact(ctx, "1.5.6")
    save_journal(
        ctx.paths.journal_path,
        InstallJournal(
            version="1.5.6",
            artifact=str(artifact),
            completed=("backup", "copy", "prune", "desktop", "icon", "wrapper", "symlink"),
        ),
    )

    result = CliRunner().invoke(cli, ["info"], obj=ctx)

    assert result.exit_code == ExitCode.SUCCESS
    assert "1.5.6" in result.output
    assert "1.5.6: apparmor" in result.output


def test_info_does_not_require_supported_os(tmp_path: Path) -> None:
    ctx = build_test_context(tmp_path, os_release=None)

    result = CliRunner().invoke(cli, ["info"], obj=ctx)

    assert result.exit_code == ExitCode.SUCCESS
