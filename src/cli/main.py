"""CLI principal (Typer).

Comandos:
- `average`: precipitación media anual de un país en un rango de años.
- `annual`: registros anuales decodificados (tabla Rich o JSON).
- `doctor`: diagnóstico y configuración.

La CLI es quien construye los colaboradores (transporte httpx, validador
Pydantic) y se los inyecta al `ClimateClient`.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from adapters.http_client import build_async_client
from adapters.json_exporter import export_annual_data_json
from adapters.validator import PydanticValidator
from cli import doctor
from cli.ui_components import build_annual_table
from core.config import AppSettings
from core.domain.models import AnnualRainfallArgs, ClimateDataList
from core.errors import ClimateClientError
from core.logging_config import configure_logging
from core.services.climate_client import ClimateClient

app = typer.Typer(no_args_is_help=True, help="Annual rainfall from the World Bank Climate Data API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@app.callback()
def _main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING...). Defaults to CLIMATE_RAIN_LOG_LEVEL.",
    ),
) -> None:
    configure_logging(log_level or AppSettings().log_level)


async def _fetch_average(settings: AppSettings, from_year: int, to_year: int, country: str, timeout: float) -> float:
    async with build_async_client(settings) as http:
        client = ClimateClient(http, PydanticValidator(), settings.base_url)
        return await client.get_ave_annual_rainfall(from_year, to_year, country, timeout=timeout)


async def _fetch_annual(settings: AppSettings, args: AnnualRainfallArgs, timeout: float) -> ClimateDataList:
    async with build_async_client(settings) as http:
        client = ClimateClient(http, PydanticValidator(), settings.base_url)
        return await client.get_annual_rainfall(args, timeout=timeout)


def _fail(exc: ClimateClientError) -> typer.Exit:
    _err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
    return typer.Exit(code=1)


@app.command()
def average(
    country: str = typer.Argument(..., help="ISO 3166-1 alpha-3 country code (e.g. GBR)."),
    from_year: int = typer.Option(1980, "--from-year", help="First year of the range."),
    to_year: int = typer.Option(1999, "--to-year", help="Last year of the range."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Per-request deadline in seconds."),
) -> None:
    """Print the average annual rainfall (mm) for COUNTRY."""

    settings = AppSettings()
    try:
        value = asyncio.run(
            _fetch_average(settings, from_year, to_year, country, timeout or settings.http_timeout_seconds)
        )
    except ClimateClientError as exc:
        raise _fail(exc) from exc
    typer.echo(repr(value))


@app.command()
def annual(
    country: str = typer.Argument(..., help="ISO 3166-1 alpha-3 country code (e.g. GBR)."),
    from_year: int = typer.Option(1980, "--from-year", help="First year of the range."),
    to_year: int = typer.Option(1999, "--to-year", help="Last year of the range."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Per-request deadline in seconds."),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Also write the records to this JSON file."),
) -> None:
    """Show the annual records the upstream returns for COUNTRY."""

    settings = AppSettings()
    args = AnnualRainfallArgs.from_years(from_year, to_year, country)
    try:
        data = asyncio.run(_fetch_annual(settings, args, timeout or settings.http_timeout_seconds))
    except ClimateClientError as exc:
        raise _fail(exc) from exc

    _console.print(build_annual_table(data, title=f"Annual rainfall {country.upper()} {from_year}-{to_year}"))
    if json_path is not None:
        written = export_annual_data_json(data=data, output_path=json_path)
        _console.print(f"[green]Saved JSON to:[/green] {written}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
