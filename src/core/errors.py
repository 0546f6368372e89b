"""Errores del cliente de clima.

Por qué una jerarquía propia:
- Cada etapa (builder, transporte, decoder, agregador) falla con un tipo
  distinto para que el llamador decida sin inspeccionar mensajes.
- Todas heredan de `ClimateClientError`, así la CLI captura una sola clase.
"""

from __future__ import annotations


class ClimateClientError(Exception):
    """Base de todos los errores del cliente."""


class ValidationError(ClimateClientError):
    """Argumentos de consulta con forma inválida (se detecta antes de I/O)."""


class InvalidURLError(ClimateClientError):
    """El path o URL recibido no se puede parsear."""


class TransportError(ClimateClientError):
    """Fallo de red: conexión, timeout o protocolo."""


class RemoteError(ClimateClientError):
    """El upstream respondió con un status fuera del rango 2xx."""

    def __init__(self, status_code: int, url: str | None = None) -> None:
        self.status_code = status_code
        self.url = url
        where = f" for {url}" if url else ""
        super().__init__(f"upstream returned HTTP {status_code}{where}")


class DecodeError(ClimateClientError):
    """Body malformado o con estructura inesperada."""


class EmptyDatasetError(ClimateClientError):
    """No hay puntos para promediar."""


class NumericParseError(ClimateClientError):
    """Un valor del wire no es un decimal válido."""
