"""Console interaction abstraction for testing.

This module provides an ABC for operator interaction: yes/no confirmation and
line input with an optional timeout.
"""

from abc import ABC, abstractmethod


class Console(ABC):
    """Abstract interactive console operations for dependency injection."""

    @abstractmethod
    def is_stdin_interactive(self) -> bool:
        """Check if stdin is connected to an interactive terminal (TTY).

        Returns:
            True if stdin is a TTY, False otherwise
        """
        ...

    @abstractmethod
    def confirm(self, prompt: str, *, default: bool) -> bool:
        """Ask a yes/no question.

        Args:
            prompt: Question to display
            default: Answer used when the operator just presses enter

        Returns:
            True for yes, False for no
        """
        ...

    @abstractmethod
    def prompt(self, prompt: str, *, timeout: float) -> str | None:
        """Read one line of input.

        Args:
            prompt: Text displayed before reading
            timeout: Seconds to wait for input (0 waits forever)

        Returns:
            The line without its trailing newline, or None on timeout or EOF
        """
        ...
