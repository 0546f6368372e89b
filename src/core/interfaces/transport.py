"""Contratos de los colaboradores del cliente.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- `httpx.AsyncClient` ya cumple `HTTPTransport`; en tests se inyecta un
  cliente con `httpx.MockTransport` sin tocar el Core.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx


@runtime_checkable
class HTTPTransport(Protocol):
    """Ejecuta un `httpx.Request` ya construido.

    Reglas de diseño:
    - Es asíncrono: la cancelación de la task aborta el envío en curso.
    - Errores de red se señalan con `httpx.TransportError` (o subclases).
    """

    async def send(self, request: httpx.Request) -> httpx.Response:
        ...


@runtime_checkable
class StructValidator(Protocol):
    """Valida un objeto contra sus restricciones declarativas."""

    def validate(self, obj: object) -> None:
        """Lanza `core.errors.ValidationError` si `obj` no es válido."""

        ...
