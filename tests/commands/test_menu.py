"""Tests for the interactive main menu."""

from pathlib import Path

from click.testing import CliRunner

from cursor_setup.cli.cli import cli
from cursor_setup.exit_codes import ExitCode
from cursor_setup.gateway.console.fake import FakeConsole
from cursor_setup.gateway.http.fake import FakeHttpClient
from cursor_setup.gateway.system.fake import FakeSystem
from tests.test_utils.context_builders import (
    CHANGELOG_URL,
    ICON_URL,
    appimage_bytes,
    build_test_context,
    changelog_body,
    download_url,
    write_installed_artifact,
)


def test_install_from_menu_end_to_end(tmp_path: Path) -> None:
    http = FakeHttpClient(
        text_responses={CHANGELOG_URL: changelog_body("1.5.6")},
        downloads={download_url("1.5.6"): appimage_bytes(), ICON_URL: b"<svg/>"},
    )
    system = FakeSystem()
    console = FakeConsole(
        is_interactive=True, confirm_responses=[True], prompt_responses=["1", "4"]
    )
    ctx = build_test_context(tmp_path, http=http, system=system, console=console)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == ExitCode.SUCCESS, result.output
    artifact = ctx.paths.app_dir / "cursor-1.5.6.AppImage"
    assert artifact.is_file()
    assert f"Exec={artifact} --no-sandbox" in ctx.paths.user_desktop_file.read_text()
    assert system.symlinks[ctx.paths.symlink_path] == ctx.paths.wrapper_path
    assert f'exec {artifact} --no-sandbox "$@"' in ctx.paths.wrapper_path.read_text()
    assert console.confirm_prompts == ["No previous installation detected. Install version 1.5.6?"]
    assert "=== MAIN MENU ===" in result.output


def test_invalid_choice_reprompts(tmp_path: Path) -> None:
    console = FakeConsole(is_interactive=True, prompt_responses=["9", "4"])
    ctx = build_test_context(tmp_path, console=console)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == ExitCode.SUCCESS
    assert "Invalid option '9'" in result.output
    assert len(console.prompts) == 2


def test_timeout_cancels(tmp_path: Path) -> None:
    ctx = build_test_context(tmp_path, console=FakeConsole(is_interactive=True))

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == ExitCode.CANCELLED
    assert "No input received" in result.output


def test_shortcut_then_info_from_menu(tmp_path: Path) -> None:
    console = FakeConsole(is_interactive=True, prompt_responses=["2", "3", "4"])
    ctx = build_test_context(tmp_path, console=console)
    write_installed_artifact(ctx, "1.5.6")

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert ctx.paths.user_desktop_file.exists()
    assert ctx.paths.system_desktop_file.exists()
    assert "Installed version" in result.output


def test_menu_checks_os_first(tmp_path: Path) -> None:
    console = FakeConsole(is_interactive=True, prompt_responses=["4"])
    ctx = build_test_context(tmp_path, console=console, os_release=None)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == ExitCode.ERROR
    assert console.prompts == []
