"""Tests for the Loyverse API client."""

import httpx
import pytest

from loyverse_proxy.services.loyverse_client import (
    TransportError,
    UpstreamError,
    clean_params,
)


def test_clean_params_drops_none_values() -> None:
    params = {"limit": 50, "cursor": None, "store_id": "abc", "show_deleted": False}
    assert clean_params(params) == [
        ("limit", "50"),
        ("store_id", "abc"),
        ("show_deleted", "false"),
    ]


def test_clean_params_keeps_repeated_keys() -> None:
    pairs = [("items_ids", "1"), ("items_ids", "2"), ("cursor", None)]
    assert clean_params(pairs) == [("items_ids", "1"), ("items_ids", "2")]


def test_clean_params_empty() -> None:
    assert clean_params(None) == []
    assert clean_params({}) == []


@pytest.mark.asyncio
async def test_fetch_resource_builds_request_and_returns_body(make_loyverse_client) -> None:
    seen: list[httpx.Request] = []
    body = {"items": [{"id": "i-1", "item_name": "Latte"}], "cursor": None}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=body)

    client = make_loyverse_client(handler)
    try:
        data = await client.fetch_resource("items", {"limit": 10, "cursor": None})
    finally:
        await client.close()

    assert data == body
    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/v1.0/items"
    assert request.url.params.multi_items() == [("limit", "10")]
    assert request.headers["Authorization"] == "Bearer test-token"
    assert request.headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_fetch_resource_raises_upstream_error(make_loyverse_client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text='{"errors":[{"code":"UNAUTHORIZED"}]}')

    client = make_loyverse_client(handler)
    with pytest.raises(UpstreamError) as exc_info:
        await client.fetch_resource("taxes")
    await client.close()

    err = exc_info.value
    assert err.status_code == 401
    assert err.endpoint == "taxes"
    assert "UNAUTHORIZED" in err.body
    assert str(err).startswith("Loyverse API error: 401 - ")


@pytest.mark.asyncio
async def test_fetch_resource_wraps_network_failure(make_loyverse_client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_loyverse_client(handler)
    with pytest.raises(TransportError):
        await client.fetch_resource("stores")
    await client.close()


@pytest.mark.asyncio
async def test_fetch_resource_rejects_non_json_body(make_loyverse_client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    client = make_loyverse_client(handler)
    with pytest.raises(TransportError):
        await client.fetch_resource("categories")
    await client.close()


def test_build_url_strips_slashes(make_loyverse_client) -> None:
    client = make_loyverse_client(lambda request: httpx.Response(200, json={}))
    assert client.build_url("/items/") == "https://upstream.test/v1.0/items"
    assert client.build_url("items/abc") == "https://upstream.test/v1.0/items/abc"
