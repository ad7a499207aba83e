"""Tests for the httpx network collaborator."""

import json

import httpx
import pytest

from sdui.runtime import HttpApiClient


BASE = "https://api.example.com"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_post_sends_json(mock_httpx_client, settings):
    """Test JSON body and headers on POST."""
    route = mock_httpx_client.post(f"{BASE}/login").mock(
        return_value=httpx.Response(201, text="created")
    )

    async with HttpApiClient(base_url=BASE, settings=settings) as client:
        response = await client("/login", "post", {"X-Token": "t"}, {"user": "ada"})

    assert route.called
    request = route.calls.last.request
    assert json.loads(request.content) == {"user": "ada"}
    assert request.headers["X-Token"] == "t"
    assert response.status_code == 201
    assert response.body == "created"
    assert response.is_success


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_sends_query(mock_httpx_client, settings):
    """GET bodies become query parameters."""
    route = mock_httpx_client.get(f"{BASE}/search", params={"q": "shoes"}).mock(
        return_value=httpx.Response(200, json={"hits": 0})
    )

    async with HttpApiClient(base_url=BASE, settings=settings) as client:
        response = await client("/search", "GET", None, {"q": "shoes"})

    assert route.called
    assert json.loads(response.body) == {"hits": 0}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_error_status_is_returned(mock_httpx_client, settings):
    """Non-2xx is a response, not an exception."""
    mock_httpx_client.delete(f"{BASE}/item/1").mock(return_value=httpx.Response(404))

    async with HttpApiClient(base_url=BASE, settings=settings) as client:
        response = await client("/item/1", "DELETE")

    assert response.status_code == 404
    assert not response.is_success


@pytest.mark.unit
@pytest.mark.asyncio
async def test_transport_error_propagates(mock_httpx_client, settings):
    """Test connection failures raise."""
    mock_httpx_client.get(f"{BASE}/down").mock(side_effect=httpx.ConnectError("refused"))

    async with HttpApiClient(base_url=BASE, settings=settings) as client:
        with pytest.raises(httpx.ConnectError):
            await client("/down", "GET")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_injected_client_not_closed(settings):
    """A client passed in stays open."""
    shared = httpx.AsyncClient()
    client = HttpApiClient(client=shared, settings=settings)

    await client.aclose()

    assert not shared.is_closed
    await shared.aclose()
