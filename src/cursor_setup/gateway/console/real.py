"""Real Console implementation using click prompts and select() for timeouts."""

import select
import sys

import click

from cursor_setup.gateway.console.abc import Console


class RealConsole(Console):
    """Production implementation reading from the process's stdin."""

    def is_stdin_interactive(self) -> bool:
        return sys.stdin.isatty()

    def confirm(self, prompt: str, *, default: bool) -> bool:
        return click.confirm(prompt, default=default, err=True)

    def prompt(self, prompt: str, *, timeout: float) -> str | None:
        click.echo(prompt, nl=False, err=True)
        if timeout > 0:
            ready, _, _ = select.select([sys.stdin], [], [], timeout)
            if not ready:
                click.echo(err=True)
                return None
        line = sys.stdin.readline()
        if line == "":
            return None
        return line.rstrip("\n")
