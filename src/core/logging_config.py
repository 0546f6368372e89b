"""Configuración de logging para la CLI.

La librería solo usa `logging.getLogger(__name__)`; quien la embebe decide
handlers y nivel. La CLI llama a `configure_logging` una vez al arrancar.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "WARNING") -> None:
    """Logging a stderr con `RichHandler`."""

    log_level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=log_level,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))
    logging.getLogger(__name__).debug("Logging configured, level=%s", logging.getLevelName(log_level))
