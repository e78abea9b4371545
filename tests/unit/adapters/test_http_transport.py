"""
Tests for HttpTransport.

Uses httpx.MockTransport so no network access happens.
"""
import pytest
import httpx

from mensa_plan.infrastructure.adapters.errors import RequestFailed, UnexpectedStatus
from mensa_plan.infrastructure.transport import HttpTransport

URL = "https://www.swfr.de/index.php?id=1400&type=98"


def _transport(handler) -> HttpTransport:
    return HttpTransport(timeout=5.0, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_returns_body_on_200():
    transport = _transport(lambda request: httpx.Response(200, text="<plan/>"))

    assert await transport.get(URL) == "<plan/>"


@pytest.mark.asyncio
async def test_sends_get_to_url_with_default_headers():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="ok")

    await _transport(handler).get(URL)

    assert len(seen) == 1
    assert seen[0].method == "GET"
    assert str(seen[0].url) == URL
    assert "xml" in seen[0].headers["accept"]


@pytest.mark.asyncio
async def test_query_brackets_reach_the_server():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="ok")

    await _transport(handler).get(URL + "&tx_swfrspeiseplan_pi1[ort]=610")

    assert seen[0].url.params["tx_swfrspeiseplan_pi1[ort]"] == "610"


@pytest.mark.asyncio
async def test_404_raises_unexpected_status():
    transport = _transport(lambda request: httpx.Response(404, text="not found"))

    with pytest.raises(UnexpectedStatus) as exc_info:
        await transport.get(URL)

    assert exc_info.value.status_code == 404
    assert exc_info.value.body == "not found"


@pytest.mark.asyncio
async def test_any_non_200_is_an_error():
    transport = _transport(lambda request: httpx.Response(204))

    with pytest.raises(UnexpectedStatus) as exc_info:
        await transport.get(URL)

    assert exc_info.value.status_code == 204


@pytest.mark.asyncio
async def test_does_not_retry():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(503)

    with pytest.raises(UnexpectedStatus):
        await _transport(handler).get(URL)

    assert len(calls) == 1


@pytest.mark.asyncio
async def test_connection_error_raises_request_failed():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Name or service not known", request=request)

    with pytest.raises(RequestFailed) as exc_info:
        await _transport(handler).get(URL)

    assert exc_info.value.url == URL
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_timeout_raises_request_failed():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(RequestFailed, match="Timeout"):
        await _transport(handler).get(URL)


def test_extra_headers_are_merged():
    transport = HttpTransport(headers={"X-Test": "1"})

    assert transport.headers["X-Test"] == "1"
    assert transport.headers["User-Agent"] == HttpTransport.DEFAULT_HEADERS["User-Agent"]
