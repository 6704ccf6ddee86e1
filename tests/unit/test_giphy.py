"""Tests for the Giphy client using httpx.MockTransport."""

import httpx
import pytest

from tests.conftest import make_settings
from viralgif_engine.adapters.giphy import GiphyClient
from viralgif_engine.common.exceptions import MediaLookupError

GIF_URL = "https://media.giphy.com/media/abc/giphy.gif"


def gif(url=GIF_URL):
    return {"id": "abc", "images": {"original": {"url": url}}}


def make_client(handler) -> GiphyClient:
    settings = make_settings(giphy_api_key="giphy-key")
    return GiphyClient(settings, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestById:
    async def test_returns_original_url(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"data": gif()})

        client = make_client(handler)
        assert await client.by_id("abc") == GIF_URL
        assert seen[0].url.path == "/v1/gifs/abc"
        assert seen[0].url.params["api_key"] == "giphy-key"
        await client.close()

    async def test_not_found(self):
        client = make_client(lambda request: httpx.Response(404, json={"meta": {"status": 404}}))
        with pytest.raises(MediaLookupError, match="HTTP 404"):
            await client.by_id("missing")

    async def test_malformed_body(self):
        client = make_client(lambda request: httpx.Response(200, json={"data": {"images": {}}}))
        with pytest.raises(MediaLookupError, match="Invalid Giphy response"):
            await client.by_id("abc")

    async def test_non_json_body(self):
        client = make_client(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(MediaLookupError, match="non-JSON"):
            await client.by_id("abc")

    async def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(MediaLookupError, match="request failed"):
            await make_client(handler).by_id("abc")


class TestSearch:
    async def test_first_result(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"data": [gif(), gif("https://other.gif")]})

        assert await make_client(handler).by_search_term("this is fine") == GIF_URL
        params = seen[0].url.params
        assert seen[0].url.path == "/v1/gifs/search"
        assert params["q"] == "this is fine"
        assert params["limit"] == "10"
        assert params["rating"] == "g"
        assert params["lang"] == "en"

    async def test_no_results(self):
        client = make_client(lambda request: httpx.Response(200, json={"data": []}))
        with pytest.raises(MediaLookupError, match="No GIFs found"):
            await client.by_search_term("nothing")


async def test_close_is_idempotent():
    client = GiphyClient(make_settings())
    client._get_http_client()
    await client.close()
    await client.close()
    assert client._http_client is None
