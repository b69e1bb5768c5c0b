"""
Unit tests for the proxy API client.
"""
import json

import httpx
import pytest

from cliplens.client.api import ClientConfig, ProxyApiClient, ProxyRequestError
from cliplens.client.models import ClipMatch, SearchQuery


def make_client(handler, api_key=None) -> ProxyApiClient:
    http = httpx.AsyncClient(base_url="http://proxy.test", transport=httpx.MockTransport(handler))
    return ProxyApiClient(ClientConfig(base_url="http://proxy.test", api_key=api_key), http=http)


class TestProxyApiClient:
    """Tests for the four proxy calls."""

    @pytest.mark.asyncio
    async def test_search_builds_result_set(self, sample_search_envelope):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=sample_search_envelope)

        api = make_client(handler)
        results = await api.search(SearchQuery("idx-1", "a dog", credential=None))
        await api.aclose()

        assert seen == {"path": "/api/search", "body": {"indexId": "idx-1", "prompt": "a dog"}}
        assert len(results) == 2
        assert results[0] == ClipMatch("vid-1", 12.5, 20.0, "high", "https://thumbs.test/vid-1.jpg")
        assert [clip.video_id for clip in results] == ["vid-1", "vid-2"]

    @pytest.mark.asyncio
    async def test_configured_credential_is_sent(self):
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"title": "t", "summary": "s"})

        api = make_client(handler, api_key="tl-key")
        await api.analyze("idx-1", "vid-1")

        assert bodies == [{"indexId": "idx-1", "videoId": "vid-1", "apiKey": "tl-key"}]

    @pytest.mark.asyncio
    async def test_query_credential_wins(self):
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"data": []})

        api = make_client(handler, api_key="config-key")
        await api.search(SearchQuery("idx-1", "dog", credential="query-key"))

        assert bodies[0]["apiKey"] == "query-key"

    @pytest.mark.asyncio
    async def test_engineer_prompt(self):
        def handler(request):
            assert json.loads(request.content) == {"prompt": "bike"}
            return httpx.Response(200, json={"engineeredPrompt": "a person riding a bicycle"})

        api = make_client(handler)
        assert await api.engineer_prompt("bike") == "a person riding a bicycle"

    @pytest.mark.asyncio
    async def test_get_video_uses_path_form(self):
        def handler(request):
            assert request.method == "GET"
            assert request.url.path == "/api/videos/idx-1/vid-1"
            return httpx.Response(200, json={"_id": "vid-1"})

        api = make_client(handler)
        assert await api.get_video("idx-1", "vid-1") == {"_id": "vid-1"}

    @pytest.mark.asyncio
    async def test_error_carries_status_and_server_message(self):
        def handler(request):
            return httpx.Response(404, json={"error": "Video not ready or not found."})

        api = make_client(handler)
        with pytest.raises(ProxyRequestError) as exc_info:
            await api.get_video("idx-1", "vid-1")

        assert exc_info.value.status_code == 404
        assert exc_info.value.is_not_found
        assert exc_info.value.server_message == "Video not ready or not found."

    @pytest.mark.asyncio
    async def test_non_json_error_has_no_server_message(self):
        def handler(request):
            return httpx.Response(502, text="Bad Gateway")

        api = make_client(handler)
        with pytest.raises(ProxyRequestError) as exc_info:
            await api.search(SearchQuery("idx-1", "dog"))

        assert exc_info.value.status_code == 502
        assert exc_info.value.server_message is None

    @pytest.mark.asyncio
    async def test_transport_error_has_no_status(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        api = make_client(handler)
        with pytest.raises(ProxyRequestError) as exc_info:
            await api.analyze("idx-1", "vid-1")

        assert exc_info.value.status_code is None
        assert not exc_info.value.is_not_found


class TestMalformedSuccessBodies:
    """A 2xx body the client cannot use is reported as a ProxyRequestError."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("call", [
        lambda api: api.search(SearchQuery("idx-1", "dog")),
        lambda api: api.engineer_prompt("bike"),
        lambda api: api.analyze("idx-1", "vid-1"),
        lambda api: api.get_video("idx-1", "vid-1"),
    ])
    async def test_non_json_success_body(self, call):
        api = make_client(lambda request: httpx.Response(200, text="<html>gateway</html>"))

        with pytest.raises(ProxyRequestError) as exc_info:
            await call(api)

        assert exc_info.value.status_code == 200
        assert exc_info.value.server_message is None
        assert not exc_info.value.is_not_found

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"engineeredPrompt": None}, {"engineeredPrompt": "  "}, ["x"]])
    async def test_engineer_prompt_without_text(self, body):
        api = make_client(lambda request: httpx.Response(200, json=body))

        with pytest.raises(ProxyRequestError):
            await api.engineer_prompt("bike")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("envelope", [
        {"data": [{"start": 1.0, "end": 2.0}]},
        {"data": [{"video_id": "vid-1", "start": "soon"}]},
        {"data": "not a list of clips"},
        ["not", "an", "envelope"],
    ])
    async def test_malformed_search_envelope(self, envelope):
        api = make_client(lambda request: httpx.Response(200, json=envelope))

        with pytest.raises(ProxyRequestError):
            await api.search(SearchQuery("idx-1", "dog"))
