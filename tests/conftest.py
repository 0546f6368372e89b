"""Fixtures compartidos: un upstream falso servido con `httpx.MockTransport`.

Los tests nunca tocan la red; cada ruta del upstream devuelve un body XML
generado con el propio codec o un error de transporte.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

import httpx
import pytest

from adapters.climate_xml import encode_annual_data
from adapters.validator import PydanticValidator
from core.domain.models import ClimateDataList, ClimateDataPoint
from core.services.climate_client import ClimateClient

BASE_URL = "http://climatedataapi.worldbank.org/climateweb/rest/v1"
BASE_PATH = httpx.URL(BASE_URL).path

GBR_1980_1999 = ClimateDataList(
    points=[
        ClimateDataPoint(year=1980, to_year=1999, gcm="bccr_bcm2_0", variable="pr", value="988.5"),
        ClimateDataPoint(year=1980, to_year=1999, gcm="cccma_cgcm3_1", variable="pr", value="990.5"),
    ]
)


class FakeUpstream:
    """Handler para `httpx.MockTransport` que enruta por path relativo a la base.

    Cada ruta mapea a `(status, body)` o a una excepción que se lanza tal cual.
    Las rutas desconocidas responden 404.
    """

    def __init__(self, routes: dict[str, Any] | None = None) -> None:
        self.routes: dict[str, Any] = dict(routes or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith(BASE_PATH):
            path = path[len(BASE_PATH):]
        outcome = self.routes.get(path)
        if outcome is None:
            return httpx.Response(404, text="Not Found")
        if isinstance(outcome, Exception):
            raise outcome
        status, body = outcome
        return httpx.Response(status, content=body, headers={"Content-Type": "application/xml"})


@pytest.fixture
def upstream() -> FakeUpstream:
    """Dataset que solo cubre el periodo 1980-1999 para GBR."""

    return FakeUpstream(
        {
            "/country/annualavg/pr/1980/1999/GBR.xml": (200, encode_annual_data(GBR_1980_1999)),
            "/country/annualavg/pr/1985/1995/GBR.xml": (200, b"<list />"),
        }
    )


@pytest.fixture
def run_client(upstream: FakeUpstream) -> Callable[[Callable[[ClimateClient], Awaitable[Any]]], Any]:
    """Ejecuta `call(client)` con un `ClimateClient` conectado a `upstream`."""

    def _run(call: Callable[[ClimateClient], Awaitable[Any]]) -> Any:
        async def _go() -> Any:
            async with httpx.AsyncClient(transport=httpx.MockTransport(upstream)) as http:
                client = ClimateClient(http, PydanticValidator(), BASE_URL)
                return await call(client)

        return asyncio.run(_go())

    return _run
