"""cursor-setup CLI entry point.

This package provides a Click-based installer and updater for the Cursor
AppImage on Ubuntu-family systems. See `cursor-setup-ubuntu --help` for details.
"""

from cursor_setup.cli.cli import cli


def main() -> None:
    """CLI entry point used by the `cursor-setup-ubuntu` console script."""
    cli()
