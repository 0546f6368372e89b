"""Cliente del Climate Data API (precipitación anual).

Flujo de una llamada:

    args -> validador -> build_get_request -> transport.send
         -> decode_annual_data -> average_in_range -> float

Cada etapa lanza su propio error (`core.errors`) y no hay reintentos: la
política de retry, si hace falta, es del llamador. El cliente no guarda
estado por llamada, así que una instancia se puede compartir entre tasks.
"""

from __future__ import annotations

import logging

import httpx

from adapters.climate_xml import decode_annual_data
from core.domain.models import AnnualRainfallArgs, ClimateDataList
from core.errors import RemoteError, TransportError
from core.interfaces.transport import HTTPTransport, StructValidator
from core.services.aggregation import average_in_range
from core.services.request_builder import build_get_request

logger = logging.getLogger(__name__)

ANNUAL_RAINFALL_PATH = "/country/annualavg/pr/{from_ccyy}/{to_ccyy}/{country}.xml"


class ClimateClient:
    """Cliente de larga vida: transporte, validador y URL base inyectados."""

    def __init__(self, transport: HTTPTransport, validator: StructValidator, base_url: str) -> None:
        self._transport = transport
        self._validator = validator
        self._base_url = base_url

    @property
    def base_url(self) -> str:
        return self._base_url

    def new_get_request(self, path_or_url: str, *, timeout: float | None = None) -> httpx.Request:
        """GET contra la URL base (o una URL absoluta). No hace I/O."""

        return build_get_request(self._base_url, path_or_url, timeout=timeout)

    async def get_annual_rainfall(
        self,
        args: AnnualRainfallArgs,
        *,
        timeout: float | None = None,
    ) -> ClimateDataList:
        """Descarga y decodifica los registros anuales de `args`.

        Una lista vacía es un resultado válido aquí; el error por falta de
        datos lo decide el agregador.
        """

        self._validator.validate(args)

        path = ANNUAL_RAINFALL_PATH.format(
            from_ccyy=args.from_ccyy,
            to_ccyy=args.to_ccyy,
            country=args.country_iso.upper(),
        )
        request = self.new_get_request(path, timeout=timeout)
        logger.debug("GET %s", request.url)

        try:
            response = await self._transport.send(request)
        except httpx.RequestError as exc:
            raise TransportError(f"request to {request.url} failed: {exc!r}") from exc

        if not response.is_success:
            logger.warning("Upstream answered HTTP %s for %s", response.status_code, request.url)
            raise RemoteError(response.status_code, str(request.url))

        data = decode_annual_data(response.content)
        logger.debug("Decoded %d point(s) from %s", len(data), request.url)
        return data

    async def get_ave_annual_rainfall(
        self,
        from_year: int,
        to_year: int,
        country_code: str,
        *,
        timeout: float | None = None,
    ) -> float:
        """Precipitación media anual de `country_code` entre dos años.

        La media se calcula en `Decimal`; la conversión final a `float` es el
        único paso con pérdida de precisión.
        """

        args = AnnualRainfallArgs.from_years(from_year, to_year, country_code)
        data = await self.get_annual_rainfall(args, timeout=timeout)
        return float(average_in_range(data, from_year, to_year))
