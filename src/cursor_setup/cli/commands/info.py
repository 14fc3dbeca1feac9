"""Info command - display the current installation state."""

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from cursor_setup.core.context import CursorSetupContext
from cursor_setup.core.inspector import NoInstallation, find_installed
from cursor_setup.core.installer import list_backups, load_journal
from cursor_setup.exit_codes import ExitCode


def _path_cell(path: Path) -> str:
    if path.exists() or path.is_symlink():
        return str(path)
    return f"[dim]{path} (missing)[/dim]"


def build_info_table(ctx: CursorSetupContext) -> Table:
    """Collect installation facts into a two-column table."""
    paths = ctx.paths
    installed = find_installed(paths.app_dir)

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Item", style="cyan", no_wrap=True)
    table.add_column("Value")

    if isinstance(installed, NoInstallation):
        table.add_row("Installed version", "[yellow]not installed[/yellow]")
    else:
        table.add_row("Installed version", f"[green]{installed.version}[/green]")
        table.add_row("AppImage", str(installed.path))

    backups = list_backups(paths.app_dir)
    table.add_row("Backups", "\n".join(p.name for p in backups) if backups else "-")

    table.add_row("Application directory", _path_cell(paths.app_dir))
    table.add_row("Desktop entry", _path_cell(paths.user_desktop_file))
    table.add_row("Menu entry", _path_cell(paths.system_desktop_file))
    table.add_row("Icon", _path_cell(paths.icon_path))
    table.add_row("Wrapper script", _path_cell(paths.wrapper_path))
    table.add_row("Command", _path_cell(paths.symlink_path))
    table.add_row("AppArmor profile", _path_cell(paths.apparmor_profile_path))
    table.add_row("Downloads directory", str(paths.downloads_dir))
    table.add_row("Language", ctx.config.language)
    table.add_row("Architecture", f"{ctx.architecture.arch} ({ctx.architecture.machine})")

    journal = load_journal(paths.journal_path)
    if journal is None or not journal.pending:
        table.add_row("Pending install", "none")
    else:
        table.add_row(
            "Pending install",
            f"[yellow]{journal.version}: {', '.join(journal.pending)}[/yellow]",
        )
    return table


def show_info(ctx: CursorSetupContext) -> ExitCode:
    console = Console(stderr=True, width=200, no_color=not ctx.config.color)
    console.print(build_info_table(ctx))
    return ExitCode.SUCCESS


@click.command("info")
@click.pass_obj
def info_cmd(ctx: CursorSetupContext) -> None:
    """Show the installed version, file locations and pending work."""
    raise SystemExit(int(show_info(ctx)))
