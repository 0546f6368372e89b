"""Cliente completo contra un upstream falso (éxito, errores y datos parciales)."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from adapters.http_client import build_async_client
from adapters.validator import PydanticValidator
from core.config import AppSettings
from core.domain.models import AnnualRainfallArgs
from core.errors import (
    ClimateClientError,
    DecodeError,
    EmptyDatasetError,
    RemoteError,
    TransportError,
    ValidationError,
)
from core.services.climate_client import ClimateClient

from conftest import BASE_URL, GBR_1980_1999, FakeUpstream

GBR_ARGS = AnnualRainfallArgs(from_ccyy="1980", to_ccyy="1999", country_iso="GBR")


def test_new_get_request_relative_and_absolute() -> None:
    client = ClimateClient(httpx.AsyncClient(), PydanticValidator(), BASE_URL)
    path = "/country/annualavg/pr/1980/1999/GBR.xml"

    assert str(client.new_get_request(path).url) == BASE_URL + path
    assert str(client.new_get_request(BASE_URL + path).url) == BASE_URL + path


def test_get_annual_rainfall_success(run_client, upstream: FakeUpstream) -> None:
    data = run_client(lambda client: client.get_annual_rainfall(GBR_ARGS))

    assert data == GBR_1980_1999
    assert len(upstream.requests) == 1
    assert str(upstream.requests[0].url) == BASE_URL + "/country/annualavg/pr/1980/1999/GBR.xml"
    assert upstream.requests[0].method == "GET"


def test_country_code_is_upper_cased_in_path(run_client, upstream: FakeUpstream) -> None:
    args = AnnualRainfallArgs(from_ccyy="1980", to_ccyy="1999", country_iso="gbr")

    data = run_client(lambda client: client.get_annual_rainfall(args))

    assert len(data) == 2
    assert upstream.requests[0].url.path.endswith("/GBR.xml")


def test_invalid_country_fails_before_any_request(run_client, upstream: FakeUpstream) -> None:
    args = AnnualRainfallArgs(from_ccyy="1980", to_ccyy="1999", country_iso="GB")

    with pytest.raises(ValidationError):
        run_client(lambda client: client.get_annual_rainfall(args))
    assert upstream.requests == []


def test_empty_result_is_not_an_error_at_decode_time(run_client) -> None:
    args = AnnualRainfallArgs(from_ccyy="1985", to_ccyy="1995", country_iso="GBR")

    data = run_client(lambda client: client.get_annual_rainfall(args))

    assert len(data) == 0


def test_non_success_status_raises_remote_error(run_client, upstream: FakeUpstream) -> None:
    upstream.routes["/country/annualavg/pr/1980/1999/GBR.xml"] = (503, b"<<< not xml >>>")

    with pytest.raises(RemoteError) as excinfo:
        run_client(lambda client: client.get_annual_rainfall(GBR_ARGS))

    assert excinfo.value.status_code == 503
    assert excinfo.value.url == BASE_URL + "/country/annualavg/pr/1980/1999/GBR.xml"


@pytest.mark.parametrize(
    "failure",
    [
        httpx.ConnectError("connection refused"),
        httpx.ReadTimeout("timed out"),
        httpx.RemoteProtocolError("server hung up"),
    ],
)
def test_transport_failures_raise_transport_error(run_client, upstream: FakeUpstream, failure) -> None:
    upstream.routes["/country/annualavg/pr/1980/1999/GBR.xml"] = failure

    with pytest.raises(TransportError) as excinfo:
        run_client(lambda client: client.get_annual_rainfall(GBR_ARGS))

    assert excinfo.value.__cause__ is failure


def test_malformed_body_raises_decode_error(run_client, upstream: FakeUpstream) -> None:
    upstream.routes["/country/annualavg/pr/1980/1999/GBR.xml"] = (200, b"<list><domain.web.AnnualGcmDatum>")

    with pytest.raises(DecodeError):
        run_client(lambda client: client.get_annual_rainfall(GBR_ARGS))


def test_timeout_is_attached_to_sent_request(run_client, upstream: FakeUpstream) -> None:
    run_client(lambda client: client.get_annual_rainfall(GBR_ARGS, timeout=2.5))

    assert upstream.requests[0].extensions["timeout"] == httpx.Timeout(2.5).as_dict()


def test_average_for_populated_range(run_client) -> None:
    result = run_client(lambda client: client.get_ave_annual_rainfall(1980, 1999, "GBR"))

    assert isinstance(result, float)
    assert result == 989.5


def test_average_accepts_lower_case_country(run_client) -> None:
    assert run_client(lambda client: client.get_ave_annual_rainfall(1980, 1999, "gbr")) == 989.5


def test_average_for_range_without_data_raises(run_client) -> None:
    with pytest.raises(EmptyDatasetError):
        run_client(lambda client: client.get_ave_annual_rainfall(1985, 1995, "gbr"))


def test_average_for_unknown_country_raises(run_client) -> None:
    with pytest.raises(ClimateClientError):
        run_client(lambda client: client.get_ave_annual_rainfall(1980, 1999, "mde"))


def test_average_with_invalid_country_sends_nothing(run_client, upstream: FakeUpstream) -> None:
    with pytest.raises(ValidationError):
        run_client(lambda client: client.get_ave_annual_rainfall(1980, 1999, "GB"))
    assert upstream.requests == []


def test_client_is_reusable_across_concurrent_calls(run_client, upstream: FakeUpstream) -> None:
    async def _both(client: ClimateClient):
        return await asyncio.gather(
            client.get_ave_annual_rainfall(1980, 1999, "GBR"),
            client.get_annual_rainfall(GBR_ARGS),
        )

    average, data = run_client(_both)

    assert average == 989.5
    assert data == GBR_1980_1999
    assert len(upstream.requests) == 2


def test_cancellation_aborts_in_flight_request() -> None:
    async def _go() -> None:
        started = asyncio.Event()

        async def _hang(request: httpx.Request) -> httpx.Response:
            started.set()
            await asyncio.sleep(60)
            return httpx.Response(200)

        async with httpx.AsyncClient(transport=httpx.MockTransport(_hang)) as http:
            client = ClimateClient(http, PydanticValidator(), BASE_URL)
            task = asyncio.create_task(client.get_annual_rainfall(GBR_ARGS))
            await started.wait()
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

    asyncio.run(_go())


def test_caller_deadline_stops_hanging_upstream() -> None:
    async def _hang(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(60)
        return httpx.Response(200)

    async def _go() -> None:
        async with httpx.AsyncClient(transport=httpx.MockTransport(_hang)) as http:
            client = ClimateClient(http, PydanticValidator(), BASE_URL)
            with pytest.raises(asyncio.TimeoutError):
                await asyncio.wait_for(client.get_ave_annual_rainfall(1980, 1999, "GBR"), timeout=0.05)

    asyncio.run(_go())


def _run_with_production_client(handler) -> None:
    async def _go() -> None:
        async with build_async_client(AppSettings(_env_file=None), transport=httpx.MockTransport(handler)) as http:
            client = ClimateClient(http, PydanticValidator(), BASE_URL)
            await client.get_annual_rainfall(GBR_ARGS)

    asyncio.run(_go())


def test_redirect_loop_raises_transport_error() -> None:
    def _loop(request: httpx.Request) -> httpx.Response:
        return httpx.Response(302, headers={"Location": str(request.url)})

    with pytest.raises(TransportError) as excinfo:
        _run_with_production_client(_loop)

    assert isinstance(excinfo.value.__cause__, httpx.TooManyRedirects)


def test_bad_content_encoding_raises_transport_error() -> None:
    def _not_gzip(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<list/>", headers={"Content-Encoding": "gzip"})

    with pytest.raises(TransportError) as excinfo:
        _run_with_production_client(_not_gzip)

    assert isinstance(excinfo.value.__cause__, httpx.DecodingError)
