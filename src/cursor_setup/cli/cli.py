import logging

import click

from cursor_setup.cli.commands.info import info_cmd
from cursor_setup.cli.commands.install import install_cmd, install_file_cmd
from cursor_setup.cli.commands.shortcut import shortcut_cmd
from cursor_setup.cli.ensure import Ensure
from cursor_setup.cli.menu import run_menu
from cursor_setup.core.config import ConfigError
from cursor_setup.core.context import create_context
from cursor_setup.exit_codes import ExitCode
from cursor_setup.output import error_output

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

LOG_FORMAT = "%(name)s - %(levelname)s - %(message)s"


@click.group(context_settings=CONTEXT_SETTINGS, invoke_without_command=True)
@click.version_option(package_name="cursor-setup")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Install and update the Cursor AppImage on Ubuntu.

    Run without a subcommand for the interactive menu.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context()
        except (ConfigError, ValueError) as e:
            error_output(str(e))
            raise SystemExit(int(ExitCode.ERROR)) from None

    if ctx.obj.config.debug and not debug:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)
    if not ctx.obj.config.color:
        ctx.color = False

    if ctx.invoked_subcommand is None:
        Ensure.supported_system(ctx.obj)
        raise SystemExit(int(run_menu(ctx.obj)))


cli.add_command(install_cmd)
cli.add_command(install_file_cmd)
cli.add_command(shortcut_cmd)
cli.add_command(info_cmd)
