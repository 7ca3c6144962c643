"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from ftb2pack import __version__
from ftb2pack.api.client import ModpacksAPIClient
from ftb2pack.core.install_manager import InstallManager
from ftb2pack.exceptions import FTB2PackError, SelectionError
from ftb2pack.models.catalog import Modpack, ModpackVersion
from ftb2pack.models.config import AppConfig
from ftb2pack.storage.config_manager import ConfigManager
from ftb2pack.transfer import close_session
from ftb2pack.utils.structured_logger import create_structured_logger

from .formatters import (
    format_error_with_suggestions,
    print_catalog_table,
    print_config,
    print_install_summary,
    print_versions_table,
)
from .progress_manager import ProgressManager

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("ftb2pack")

app = typer.Typer(
    name="ftb2pack",
    help=(
        "Turn Feed The Beast modpacks into portable modpack packages. Use"
        " 'ftb2pack <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "ftb2pack"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


def _load_config(cli_options: dict | None = None) -> AppConfig:
    try:
        return ConfigManager(CONFIG_FILE).load_config(cli_options)
    except FTB2PackError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e


async def _resolve_selection(
    client: ModpacksAPIClient, pack_id: int, version: str
) -> tuple[Modpack, ModpackVersion]:
    """Looks up the pack and the requested version (name or id) in the catalog."""
    catalog = await client.fetch_catalog()
    pack = catalog.find_pack(pack_id)
    if pack is None:
        raise SelectionError(f"No modpack with id {pack_id} in the catalog.")
    selected = pack.find_version(version)
    if selected is None:
        raise SelectionError(f"Modpack '{pack.name}' has no version '{version}'.")
    return pack, selected


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-v debug, -vv also library debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
):
    """FTB modpack to portable package converter"""
    if version:
        console.print(f"[bold]ftb2pack[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    logging.getLogger("ftb2pack").setLevel("DEBUG" if verbose >= 1 else "INFO")
    if verbose >= 2:
        logging.getLogger().setLevel("DEBUG")

    if show_config:
        config = _load_config()
        print_config(
            CONFIG_FILE, config.model_dump(include=AppConfig.get_ini_keys())
        )
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    destination: str = typer.Option(
        ".", "--destination", "-d", help="Default directory for new packages."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing configuration."
    ),
):
    """Create the configuration file."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    try:
        ConfigManager(CONFIG_FILE).save_new_config({"destination": destination})
    except FTB2PackError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e
    console.print(f"[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")


@app.command(name="list")
def list_command(
    search: str = typer.Option("", "--search", "-s", help="Filter by name or tag."),
    catalog_file: Path | None = typer.Option(  # noqa: B008
        None, "--catalog-file", help="Read the catalog from a saved JSON file."
    ),
):
    """List modpacks from the catalog."""
    config = _load_config()

    async def _list_async():
        if catalog_file:
            return ModpacksAPIClient.load_catalog_file(catalog_file)
        async with ModpacksAPIClient(config.api_url, config.catalog_url) as client:
            return await client.fetch_catalog()

    try:
        catalog = asyncio.run(_list_async())
    except FTB2PackError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e
    print_catalog_table(catalog.search(search))


@app.command()
def versions(pack_id: int = typer.Argument(..., help="Modpack id.")):
    """Show the versions of a modpack."""
    config = _load_config()

    async def _versions_async():
        async with ModpacksAPIClient(config.api_url, config.catalog_url) as client:
            catalog = await client.fetch_catalog()
        pack = catalog.find_pack(pack_id)
        if pack is None:
            raise SelectionError(f"No modpack with id {pack_id} in the catalog.")
        return pack

    try:
        pack = asyncio.run(_versions_async())
    except FTB2PackError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e
    print_versions_table(pack)


@app.command()
def install(
    pack_id: int = typer.Argument(..., help="Modpack id."),
    version: str = typer.Argument(..., help="Version name or id."),
    dest: Path | None = typer.Option(  # noqa: B008
        None, "--dest", "-d", help="Directory to create the package in."
    ),
    no_progress: bool = typer.Option(
        False, "--no-progress", help="Do not show the progress bar."
    ),
):
    """Build a client package: manifest.json plus overrides."""
    cli_options = {"destination": str(dest)} if dest else None
    config = _load_config(cli_options)

    async def _install_async():
        log_dir = Path(config.log_dir) if config.log_dir else CONFIG_DIR / "logs"
        base_logger, events = create_structured_logger(log_dir, config.json_logs)
        try:
            async with ModpacksAPIClient(config.api_url, config.catalog_url) as client:
                pack, selected = await _resolve_selection(client, pack_id, version)
                console.print(
                    f"[bold cyan]📦 Installing {pack.name} {selected.name}...[/bold cyan]"
                )
                async with ProgressManager(
                    console, enabled=not no_progress
                ) as progress:
                    manager = InstallManager(
                        client,
                        events=events,
                        on_outcome=progress.record,
                        on_start=progress.start_files,
                    )
                    return await manager.install(
                        pack.id, selected.id, Path(config.destination), pack.name
                    )
        finally:
            await close_session()
            base_logger.close()

    start_time = time.monotonic()
    try:
        report = asyncio.run(_install_async())
    except FTB2PackError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e
    print_install_summary(report, time.monotonic() - start_time)


@app.command()
def server(
    pack_id: int = typer.Argument(..., help="Modpack id."),
    version: str = typer.Argument(..., help="Version name or id."),
    dest: Path | None = typer.Option(  # noqa: B008
        None, "--dest", "-d", help="Directory to save the installer in."
    ),
):
    """Download the server installer for this platform."""
    cli_options = {"destination": str(dest)} if dest else None
    config = _load_config(cli_options)

    async def _server_async():
        log_dir = Path(config.log_dir) if config.log_dir else CONFIG_DIR / "logs"
        base_logger, events = create_structured_logger(log_dir, config.json_logs)
        try:
            async with ModpacksAPIClient(config.api_url, config.catalog_url) as client:
                pack, selected = await _resolve_selection(client, pack_id, version)
                manager = InstallManager(client, events=events)
                return await manager.install_server(
                    Path(config.destination), pack.id, selected.id
                )
        finally:
            await close_session()
            base_logger.close()

    try:
        target = asyncio.run(_server_async())
    except FTB2PackError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e
    console.print(f"[bold green]✓ Server installer saved to '{target}'[/bold green]")


@app.command()
def diagnose():
    """Diagnose common configuration and connectivity issues."""
    console.print("\n[bold cyan]Running diagnostics...[/bold cyan]\n")
    issues_found = False
    if CONFIG_FILE.is_file():
        console.print(f"[green]✓[/] Config file exists at: [dim]{CONFIG_FILE}[/dim]")
    else:
        console.print(
            "[yellow]○[/] No config file, defaults are used. "
            "Run [cyan]ftb2pack init[/cyan] to create one."
        )
    try:
        config = ConfigManager(CONFIG_FILE).load_config()
        console.print("[green]✓[/] Configuration is valid.")
    except FTB2PackError as e:
        console.print(f"[red]✗ Configuration validation failed: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print("\n[dim]Testing connectivity to the modpack catalog...[/dim]")

    async def test_connection() -> bool:
        async with ModpacksAPIClient(config.api_url, config.catalog_url) as client:
            try:
                catalog = await client.fetch_catalog()
            except FTB2PackError as e:
                console.print(f"[red]✗ Catalog request failed: {e}[/red]")
                return False
        console.print(
            f"[green]✓[/] Catalog reachable ({len(catalog.packs)} modpacks)."
        )
        return True

    if not asyncio.run(test_connection()):
        issues_found = True
    console.print()
    if not issues_found:
        console.print(
            "[bold green]✓ All checks passed! Your setup looks good.[/bold green]\n"
        )
    else:
        console.print(
            "[bold red]✗ Some issues were found. "
            "Please review the messages above.[/bold red]\n"
        )
        raise typer.Exit(code=1)
