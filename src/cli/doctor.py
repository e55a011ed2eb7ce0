"""Doctor commands for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.imagery_sources import discover_tessera_paths, discover_webodm_tasks
from core.config import AppSettings, load_settings
from core.logging_setup import setup_logging

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings, url: str) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


async def _check_hosts(settings: AppSettings) -> list[tuple[str, bool, str]]:
    targets = {
        "Imagery catalog": f"http://{settings.posm_fqdn}/imagery",
        "WebODM": f"http://{settings.webodm_fqdn}/",
    }
    checks = await asyncio.gather(*(_check_http(settings, url) for url in targets.values()))
    return [(label, ok, detail) for label, (ok, detail) in zip(targets, checks)]


def build_report(settings: AppSettings) -> Table:
    table = Table(title="posm-imagery doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    posm_status = "OK" if settings.posm_config_path.is_file() else "DEFAULTS"
    table.add_row("POSM config", posm_status, str(settings.posm_config_path))
    table.add_row("POSM host", "OK", settings.posm_fqdn)
    table.add_row("WebODM host", "OK", settings.webodm_fqdn)

    tessera = discover_tessera_paths(settings.tessera_config_dir)
    table.add_row(
        "Tile server sources",
        "OK" if tessera else "EMPTY",
        f"{len(tessera)} in {settings.tessera_config_dir}",
    )
    tasks = discover_webodm_tasks(settings.webodm_project_path)
    table.add_row(
        "WebODM tasks",
        "OK" if tasks else "EMPTY",
        f"{len(tasks)} in {settings.webodm_project_path}",
    )

    # Connectivity (best-effort)
    for label, ok, detail in asyncio.run(_check_hosts(settings)):
        table.add_row(label, "OK" if ok else "FAIL", detail)

    return table


@app.command()
def run() -> None:
    """Check the local origins and the reachability of the remote hosts."""

    setup_logging()
    settings = load_settings()
    setup_logging(settings.log_level)
    _console.print(build_report(settings))


@app.command(name="show-config")
def show_config() -> None:
    """Print the effective settings (env > POSM config > defaults) as JSON."""

    settings = load_settings()
    typer.echo(settings.model_dump_json(indent=2))
