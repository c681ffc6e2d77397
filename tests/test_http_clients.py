"""Tests for HTTP-based adapters."""

import asyncio

import httpx
import pytest

from dining_macros.adapters.dine_client import HttpxDineClient


def _client(handler) -> HttpxDineClient:  # type: ignore[no-untyped-def]
    transport = httpx.MockTransport(handler)
    return HttpxDineClient(
        base_url="https://dine.test/v1/",
        location_id="loc-1",
        http_client=httpx.AsyncClient(transport=transport),
        user_agent="MacroCount/test",
    )


def test_dine_client_fetches_periods_and_menu() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path.endswith("/periods"):
            return httpx.Response(200, json={"periods": [{"id": "p1", "name": "Lunch"}]})
        return httpx.Response(200, json={"menu": {"periods": {"id": "p1"}}})

    client = _client(handler)

    periods = asyncio.run(client.get_periods("2025-09-02", platform=2))
    menu = asyncio.run(client.get_period_menu("p1", "2025-09-02", platform=0))

    assert periods["periods"][0]["name"] == "Lunch"
    assert menu["menu"]["periods"]["id"] == "p1"
    assert seen[0].url.path == "/v1/location/loc-1/periods"
    assert seen[0].url.params["platform"] == "2"
    assert seen[0].url.params["date"] == "2025-09-02"
    assert seen[1].url.path == "/v1/location/loc-1/periods/p1"
    assert seen[1].url.params["platform"] == "0"
    assert seen[1].headers["User-Agent"] == "MacroCount/test"
    assert seen[1].headers["Accept"] == "application/json"


def test_dine_client_raises_on_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="maintenance")

    client = _client(handler)

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.get_periods("2025-09-02", platform=2))


def test_dine_client_close() -> None:
    client = _client(lambda request: httpx.Response(200, json={}))

    asyncio.run(client.close())

    assert client.http_client.is_closed
