"""Interactive main menu shown when no subcommand is given."""

import logging

import click

from cursor_setup.cli.commands.info import show_info
from cursor_setup.cli.commands.shortcut import run_shortcut
from cursor_setup.core.context import CursorSetupContext
from cursor_setup.core.update_flow import check_and_install
from cursor_setup.exit_codes import ExitCode
from cursor_setup.output import error_output, user_output, warning_output

logger = logging.getLogger(__name__)

MENU_PROMPT = "Select an option [1-4]: "


def _print_menu() -> None:
    user_output()
    user_output(click.style("=== MAIN MENU ===", bold=True))
    user_output("1) Check for updates / install")
    user_output("2) Create desktop shortcut")
    user_output("3) Show installation info")
    user_output("4) Exit")


def run_menu(ctx: CursorSetupContext) -> ExitCode:
    """Loop over the main menu until the operator exits or input stops.

    Returns:
        SUCCESS on exit, CANCELLED on input timeout, EOF or an aborted prompt
    """
    while True:
        _print_menu()
        choice = ctx.console.prompt(MENU_PROMPT, timeout=ctx.config.input_timeout)
        if choice is None:
            logger.warning("No menu input received (timeout or end of input)")
            warning_output("No input received, exiting.")
            return ExitCode.CANCELLED

        choice = choice.strip()
        logger.debug("Menu choice: %r", choice)
        try:
            if choice == "1":
                check_and_install(ctx, assume_yes=False, force=False)
            elif choice == "2":
                run_shortcut(ctx)
            elif choice == "3":
                show_info(ctx)
            elif choice == "4":
                user_output("Goodbye.")
                return ExitCode.SUCCESS
            else:
                logger.warning("Invalid menu selection: %r", choice)
                error_output(f"Invalid option '{choice}'. Choose 1, 2, 3 or 4.")
        except click.Abort:
            user_output()
            warning_output("Input aborted, exiting.")
            return ExitCode.CANCELLED
