"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ftb2pack.models.catalog import Modpack
from ftb2pack.models.outcome import InstallReport
from ftb2pack.utils.formatting import format_duration, format_size, format_timestamp


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "APIError": [
            "• Check your internet connection.",
            "• The modpack API might be temporarily unavailable.",
            "• Verify `api_url` / `catalog_url` with `ftb2pack --show-config`.",
        ],
        "FormatError": [
            "• The API answered with an unexpected document.",
            "• Make sure the pack and version ids exist (`ftb2pack versions <ID>`).",
        ],
        "SelectionError": [
            "• Use `ftb2pack list` to find the pack id.",
            "• Use `ftb2pack versions <ID>` to see valid version names and ids.",
        ],
        "ConfigurationError": [
            "• Run `ftb2pack init --force` to recreate the configuration.",
        ],
        "DestinationError": [
            "• Check that the destination exists and is writable.",
        ],
        "ServerInstallError": [
            "• The server installer may not exist for this version.",
            "• Please try again in a few minutes.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -v for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the current configuration."""
    console = Console()
    content = "\n".join(f"{key} = {value}" for key, value in config_data.items())
    console.print(
        Panel(
            escape(content),
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )


def print_catalog_table(packs: list[Modpack]):
    """Displays modpacks from the catalog."""
    console = Console()
    if not packs:
        console.print("[yellow]No modpacks match.[/yellow]")
        return

    table = Table(box=box.ROUNDED)
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Name", style="bold cyan")
    table.add_column("Latest", style="green")
    table.add_column("Installs", justify="right")
    table.add_column("Synopsis", overflow="ellipsis", max_width=60)

    for pack in packs:
        latest = pack.versions[0].name if pack.versions else "-"
        name = f"★ {pack.name}" if pack.featured else pack.name
        table.add_row(
            str(pack.id),
            escape(name),
            escape(latest),
            f"{pack.stats.installs:,}",
            escape(pack.synopsis),
        )
    console.print(table)
    console.print(f"[dim]{len(packs)} modpacks[/dim]")


def print_versions_table(pack: Modpack):
    """Displays the versions of one modpack."""
    console = Console()
    table = Table(
        box=box.ROUNDED, title=f"[bold]{escape(pack.name)}[/bold]", title_style=""
    )
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Name", style="bold cyan")
    table.add_column("Type")
    table.add_column("Minecraft", style="green")
    table.add_column("Loader")
    table.add_column("Memory (min/rec)", justify="right")

    for version in pack.versions:
        loader = f"{version.loader_type} {version.loader}".strip() or "-"
        table.add_row(
            str(version.id),
            escape(version.name),
            version.type,
            version.minecraft or "-",
            escape(loader),
            f"{version.memory.min}/{version.memory.recommended} MB",
        )
    console.print(table)
    console.print(
        f"Updated [blue]{format_timestamp(pack.updated)}[/blue] • "
        f"[link={pack.site_url}]{pack.site_url}[/link]"
    )


def print_install_summary(report: InstallReport, duration_s: float):
    """Displays the final summary of a client install."""
    console = Console()

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=16)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row("Package:", f"[dim]{escape(str(report.work_dir))}[/dim]")
    stats_table.add_row("✓ Downloaded:", f"[bold green]{report.downloaded}[/bold green]")
    if report.skipped:
        stats_table.add_row("○ Skipped:", f"[yellow]{report.skipped}[/yellow]")
    if report.failed:
        stats_table.add_row("✗ Failed:", f"[bold red]{report.failed}[/bold red]")
    stats_table.add_row("", "")
    stats_table.add_row("Total Size:", f"[cyan]{format_size(report.total_size)}[/cyan]")
    stats_table.add_row("Time Elapsed:", f"[blue]{format_duration(duration_s)}[/blue]")

    if report.failed:
        title = "⚠ [bold]Install Complete (with missing files)[/bold]"
        border_color = "yellow"
    else:
        title = "📦 [bold]Install Complete![/bold]"
        border_color = "green"

    console.print()
    console.print(
        Panel(
            stats_table,
            title=title,
            border_style=border_color,
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )
    for failure in report.failures:
        console.print(
            f"  [red]✗[/red] {escape(failure.name)} [dim]{escape(failure.url or '')}[/dim]"
        )
