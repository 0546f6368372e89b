"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ClimateDataList


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("climate-rain", style="bold cyan")
    subtitle = Text("World Bank Climate Data API • annual rainfall", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_annual_table(data: ClimateDataList, *, title: str = "Annual rainfall") -> Table:
    """Tabla Rich con un registro por fila, en orden del wire."""

    table = Table(title=title)
    table.add_column("GCM", style="cyan", no_wrap=True)
    table.add_column("Variable", style="white")
    table.add_column("From", style="green", justify="right")
    table.add_column("To", style="green", justify="right")
    table.add_column("Value", style="magenta", justify="right")
    for point in data.points:
        table.add_row(
            point.gcm or "-",
            point.variable or "-",
            str(point.year),
            str(point.to_year) if point.to_year is not None else "-",
            point.value,
        )
    return table
