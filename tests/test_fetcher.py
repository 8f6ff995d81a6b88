import logging
import os
import sys

import httpx
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from vaxbot.errors import NetworkError
from vaxbot.services.fetcher import fetch


def client_for(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_repeated_params_keep_order():
    seen = {}

    def handler(request):
        seen["params"] = list(request.url.params.multi_items())
        return httpx.Response(200, text='{"ok": true}')

    async with client_for(handler) as client:
        body = await fetch(
            "https://api.example.test/v2/data",
            [("areaType", "overview"), ("metric", "a"), ("metric", "b")],
            client=client,
        )

    assert body == '{"ok": true}'
    assert seen["params"] == [("areaType", "overview"), ("metric", "a"), ("metric", "b")]


@pytest.mark.asyncio
async def test_empty_params():
    def handler(request):
        assert len(request.url.params) == 0
        return httpx.Response(200, text="{}")

    async with client_for(handler) as client:
        assert await fetch("https://api.example.test/summary", client=client) == "{}"


@pytest.mark.asyncio
async def test_error_status_body_is_returned():
    def handler(request):
        return httpx.Response(503, text='{"message": "unavailable"}')

    async with client_for(handler) as client:
        body = await fetch("https://api.example.test/summary", client=client)

    assert "unavailable" in body


@pytest.mark.asyncio
async def test_connection_failure_raises_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with client_for(handler) as client:
        with pytest.raises(NetworkError):
            await fetch("https://api.example.test/summary", client=client)


@pytest.mark.asyncio
@pytest.mark.parametrize("url", ["ftp://example.test/file", "/relative/path", "not a url"])
async def test_rejects_non_http_urls(url):
    with pytest.raises(ValueError):
        await fetch(url)


@pytest.mark.asyncio
async def test_network_error_is_left_to_the_caller_to_log(caplog):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with caplog.at_level(logging.DEBUG, logger="vaxbot.services.fetcher"):
        async with client_for(handler) as client:
            with pytest.raises(NetworkError):
                await fetch("https://api.example.test/summary", client=client)

    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
