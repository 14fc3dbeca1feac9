"""Fake Console implementation for testing.

FakeConsole answers prompts from pre-configured response lists, enabling
tests of interactive flows without a terminal.
"""

from cursor_setup.gateway.console.abc import Console


class FakeConsole(Console):
    """In-memory fake that replays configured answers.

    This class has NO public setup methods. All state is provided via constructor.
    An exhausted prompt_responses list behaves like EOF (returns None).
    """

    def __init__(
        self,
        *,
        is_interactive: bool,
        confirm_responses: list[bool] | None = None,
        prompt_responses: list[str | None] | None = None,
    ) -> None:
        """Create FakeConsole with scripted answers.

        Args:
            is_interactive: Whether to report stdin as interactive
            confirm_responses: Answers returned by successive confirm() calls
            prompt_responses: Lines returned by successive prompt() calls
                (None simulates a timeout)
        """
        self._is_interactive = is_interactive
        self._confirm_responses = list(confirm_responses) if confirm_responses is not None else []
        self._prompt_responses = list(prompt_responses) if prompt_responses is not None else []
        self._confirm_prompts: list[str] = []
        self._prompts: list[str] = []

    @property
    def confirm_prompts(self) -> list[str]:
        """Questions passed to confirm(). This property is for test assertions only."""
        return self._confirm_prompts.copy()

    @property
    def prompts(self) -> list[str]:
        """Prompts passed to prompt(). This property is for test assertions only."""
        return self._prompts.copy()

    def is_stdin_interactive(self) -> bool:
        return self._is_interactive

    def confirm(self, prompt: str, *, default: bool) -> bool:
        self._confirm_prompts.append(prompt)
        if not self._confirm_responses:
            raise AssertionError(f"FakeConsole has no confirm response left for: {prompt}")
        return self._confirm_responses.pop(0)

    def prompt(self, prompt: str, *, timeout: float) -> str | None:
        self._prompts.append(prompt)
        if not self._prompt_responses:
            return None
        return self._prompt_responses.pop(0)
