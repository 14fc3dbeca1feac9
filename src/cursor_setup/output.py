"""User-facing output helpers.

All human-readable messages go to stderr so stdout stays clean for scripting.
"""

import click


def user_output(message: str = "", *, nl: bool = True) -> None:
    """Print a message for the operator on stderr."""
    click.echo(message, err=True, nl=nl)


def success_output(message: str) -> None:
    user_output(click.style("✓ ", fg="green") + message)


def warning_output(message: str) -> None:
    user_output(click.style("⚠ ", fg="yellow") + message)


def error_output(message: str) -> None:
    user_output(click.style("Error: ", fg="red") + message)
