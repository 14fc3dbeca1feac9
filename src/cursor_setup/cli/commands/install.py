"""Scripted install commands: `install` and `install-file`."""

import click

from cursor_setup.cli.ensure import Ensure
from cursor_setup.core.context import CursorSetupContext
from cursor_setup.core.update_flow import check_and_install, install_local_file


@click.command("install")
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Answer yes to every prompt")
@click.option("--force", is_flag=True, help="Reinstall even if the latest version is installed")
@click.pass_obj
def install_cmd(ctx: CursorSetupContext, assume_yes: bool, force: bool) -> None:
    """Check for the latest Cursor release and install or update it.

    Exit codes: 0 installed, 1 error, 2 already up to date, 3 cancelled.

    Examples:

    \b
      # Update without prompting
      cursor-setup-ubuntu install --yes
    """
    Ensure.supported_system(ctx)
    raise SystemExit(int(check_and_install(ctx, assume_yes=assume_yes, force=force)))


@click.command("install-file")
@click.argument("path")
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Answer yes to every prompt")
@click.pass_obj
def install_file_cmd(ctx: CursorSetupContext, path: str, assume_yes: bool) -> None:
    """Install an AppImage that was already downloaded.

    PATH may be a bare file name, which is looked up in the Downloads
    directory, or a full path.

    Examples:

    \b
      cursor-setup-ubuntu install-file Cursor-1.5.6-x86_64.AppImage
    """
    Ensure.supported_system(ctx)
    raise SystemExit(int(install_local_file(ctx, path, assume_yes=assume_yes)))
