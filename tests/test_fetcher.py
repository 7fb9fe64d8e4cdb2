"""Fetcher tests against httpx.MockTransport."""

import json

import httpx
import pytest

from movcli.errors import DecodeError, NetworkError, NoResultsError
from movcli.fetcher import Fetcher

SCENARIO_A = {
    "status": "ok",
    "result": {
        "count": 1,
        "html": '<a class="item" href="/watch/x1"><span>Movie</span><span>2020</span>'
                '<span>120m</span><div class="title">Example</div></a>',
    },
}


def make_fetcher(handler) -> Fetcher:
    return Fetcher(base_url="https://movhub.test", transport=httpx.MockTransport(handler))


def json_handler(body, status=200, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status, json=body)
    return handler


@pytest.mark.asyncio
async def test_returns_results():
    fetcher = make_fetcher(json_handler(SCENARIO_A))
    results = await fetcher.fetch("example")
    await fetcher.close()
    assert len(results) == 1
    assert results[0].title == "Example"
    assert results[0].target_path == "/watch/x1"
    assert "Movie" in results[0].subtitle
    assert "2020" in results[0].subtitle
    assert "120m" in results[0].subtitle


@pytest.mark.asyncio
async def test_request_shape():
    seen: list[httpx.Request] = []
    fetcher = make_fetcher(json_handler(SCENARIO_A, seen=seen))
    await fetcher.fetch("tom & jerry")
    await fetcher.close()
    assert len(seen) == 1
    req = seen[0]
    assert req.method == "GET"
    assert req.url.host == "movhub.test"
    assert req.url.path == "/ajax/film/search"
    assert req.url.params["keyword"] == "tom & jerry"
    assert "&" not in req.url.query.decode().split("keyword=", 1)[1]
    assert req.headers["X-Requested-With"] == "XMLHttpRequest"
    assert "application/json" in req.headers["Accept"]
    assert req.headers["User-Agent"].startswith("Mozilla/5.0")


@pytest.mark.asyncio
async def test_empty_html_is_no_results():
    fetcher = make_fetcher(json_handler({"status": "ok", "result": {"count": 0, "html": ""}}))
    with pytest.raises(NoResultsError) as exc:
        await fetcher.fetch("batman")
    await fetcher.close()
    assert exc.value.query == "batman"
    assert str(exc.value) == 'no results for "batman"'


@pytest.mark.asyncio
async def test_timeout_is_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    fetcher = make_fetcher(handler)
    with pytest.raises(NetworkError) as exc:
        await fetcher.fetch("alien")
    await fetcher.close()
    assert "network" in str(exc.value)
    assert "decode" not in str(exc.value)


@pytest.mark.asyncio
async def test_connection_error_is_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    fetcher = make_fetcher(handler)
    with pytest.raises(NetworkError):
        await fetcher.fetch("alien")
    await fetcher.close()


@pytest.mark.asyncio
async def test_non_2xx_is_network_error():
    fetcher = make_fetcher(json_handler({"error": "blocked"}, status=403))
    with pytest.raises(NetworkError) as exc:
        await fetcher.fetch("alien")
    await fetcher.close()
    assert "403" in str(exc.value)
    assert exc.value.details == {"status": 403}


@pytest.mark.asyncio
async def test_malformed_json_is_decode_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>not json</html>")

    fetcher = make_fetcher(handler)
    with pytest.raises(DecodeError):
        await fetcher.fetch("alien")
    await fetcher.close()


@pytest.mark.asyncio
async def test_wrong_envelope_shape_is_decode_error():
    fetcher = make_fetcher(json_handler({"status": "ok", "result": "nope"}))
    with pytest.raises(DecodeError):
        await fetcher.fetch("alien")
    await fetcher.close()


@pytest.mark.asyncio
async def test_single_request_no_retry():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(500, text="oops")

    fetcher = make_fetcher(handler)
    with pytest.raises(NetworkError):
        await fetcher.fetch("alien")
    await fetcher.close()
    assert len(calls) == 1



@pytest.mark.asyncio
async def test_requests_use_ten_second_timeout():
    seen: list[httpx.Request] = []
    fetcher = make_fetcher(json_handler(SCENARIO_A, seen=seen))
    await fetcher.fetch("alien")
    await fetcher.close()
    timeout = seen[0].extensions["timeout"]
    assert timeout["connect"] == timeout["read"] == timeout["write"] == timeout["pool"] == 10.0
