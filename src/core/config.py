"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP) y CLI lean config de forma consistente.
"""

from __future__ import annotations

from pathlib import Path

import typer
from dotenv import set_key
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "http://climatedataapi.worldbank.org/climateweb/rest/v1"


def get_user_env_file() -> Path:
    """`.env` global del usuario (p.ej. `~/.config/climate-rain/.env` en Linux)."""

    return Path(typer.get_app_dir("climate-rain")) / ".env"


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    if not env_path.exists():
        env_path.parent.mkdir(parents=True, exist_ok=True)
        env_path.write_text("# climate-rain user config (.env)\n", encoding="utf-8")

    for key, value in values.items():
        set_key(env_path, key, value, quote_mode="never")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="CLIMATE_RAIN_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=8,
        description="URL base del Climate Data API (rutas relativas se resuelven contra ella).",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Deadline por request (segundos).",
    )
    user_agent: str = Field(
        default="climate-rain/0.1",
        min_length=1,
        description="User-Agent para las peticiones al upstream.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging de la CLI (DEBUG, INFO, WARNING...).",
    )
