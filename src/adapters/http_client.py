"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y headers del transporte de producción.
- Facilita testeo: el cliente de clima recibe el transporte inyectado y los
  tests lo sustituyen por un `httpx.AsyncClient` con `MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    `AsyncClient.send` envía la request tal cual (los defaults del cliente
    solo se mezclan en `build_request`), así que headers y timeout por
    defecto se aplican en un hook de request sin pisar lo que ya traiga.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/xml,text/xml;q=0.9,*/*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    timeout = httpx.Timeout(settings.http_timeout_seconds)

    async def _apply_defaults(request: httpx.Request) -> None:
        for key, value in headers.items():
            request.headers.setdefault(key, value)
        request.extensions.setdefault("timeout", timeout.as_dict())

    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        headers=headers,
        transport=transport,
        event_hooks={"request": [_apply_defaults]},
    )
