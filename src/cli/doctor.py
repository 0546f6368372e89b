"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from cli.ui_components import print_banner
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(settings.base_url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or type(exc).__name__


@app.command()
def run() -> None:
    """Run baseline diagnostics against the configured upstream."""

    settings = AppSettings()
    print_banner(_console)

    table = Table(title="climate-rain doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("User-Agent", "OK", settings.user_agent)

    # Connectivity (best-effort): any HTTP answer means the host is reachable.
    ok_http, detail_http = asyncio.run(_check_http(settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] set CLIMATE_RAIN_BASE_URL or run `climate-rain doctor configure`."
        )
        raise typer.Exit(code=1)


@app.command()
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    base_url = typer.prompt("Base URL", default=settings.base_url, show_default=True).strip()
    timeout = typer.prompt(
        "HTTP timeout (seconds)",
        default=settings.http_timeout_seconds,
        type=float,
        show_default=True,
    )

    if not base_url:
        raise typer.BadParameter("base_url is required")
    if timeout <= 0:
        raise typer.BadParameter("timeout must be positive")

    env_path = write_user_env_vars(
        {
            "CLIMATE_RAIN_BASE_URL": base_url,
            "CLIMATE_RAIN_HTTP_TIMEOUT_SECONDS": f"{timeout:g}",
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
