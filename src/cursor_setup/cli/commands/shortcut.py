"""Shortcut command - regenerate the desktop launcher for the installed AppImage."""

import click

from cursor_setup.cli.ensure import Ensure
from cursor_setup.core.context import CursorSetupContext
from cursor_setup.core.inspector import NoInstallation
from cursor_setup.core.installer import create_shortcut
from cursor_setup.exit_codes import ExitCode
from cursor_setup.output import error_output, success_output, user_output


def run_shortcut(ctx: CursorSetupContext) -> ExitCode:
    result = create_shortcut(ctx)
    if isinstance(result, NoInstallation):
        error_output(f"No Cursor AppImage found in {ctx.paths.app_dir}. Install it first.")
        return ExitCode.ERROR
    for path in result:
        success_output(f"Shortcut written to {path}")
    user_output(f"Icon: {ctx.paths.icon_path}")
    return ExitCode.SUCCESS


@click.command("shortcut")
@click.pass_obj
def shortcut_cmd(ctx: CursorSetupContext) -> None:
    """Recreate the desktop entry and icon for the installed version."""
    Ensure.supported_system(ctx)
    raise SystemExit(int(run_shortcut(ctx)))
