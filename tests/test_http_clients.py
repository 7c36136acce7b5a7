"""Tests for HTTP-based adapters."""

import asyncio
import json
import logging
from urllib.parse import parse_qs

import httpx
import pytest

from smart_recipe.adapters.audio_loader import HttpxAudioLoader
from smart_recipe.adapters.google_oauth_client import HttpxGoogleOAuthClient
from smart_recipe.adapters.rest_client import HttpxRestClient


def _rest_client(handler) -> HttpxRestClient:  # type: ignore[no-untyped-def]
    transport = httpx.MockTransport(handler)
    return HttpxRestClient(
        http_client=httpx.AsyncClient(transport=transport, base_url="http://api.test")
    )


def test_rest_client_get_sends_payload_as_params() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": "r1"}])

    client = _rest_client(handler)

    data = asyncio.run(
        client.call("/api/get-recipes", payload={"page": 2}, headers={"Cookie": "a=b"})
    )

    assert data == [{"id": "r1"}]
    assert seen[0].method == "GET"
    assert seen[0].url.params["page"] == "2"
    assert seen[0].headers["cookie"] == "a=b"


def test_rest_client_put_sends_json_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "PUT"
        assert json.loads(request.content) == {"recipeId": "r1"}
        return httpx.Response(200, json={"id": "r1", "liked": True})

    client = _rest_client(handler)

    data = asyncio.run(
        client.call("/api/like-recipe", method="put", payload={"recipeId": "r1"})
    )

    assert data == {"id": "r1", "liked": True}


def test_rest_client_delete_with_empty_body_returns_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        assert request.url.params["recipeId"] == "r1"
        return httpx.Response(204)

    client = _rest_client(handler)

    result = asyncio.run(
        client.call("/api/delete-recipe", method="delete", payload={"recipeId": "r1"})
    )

    assert result is None


def test_rest_client_logs_and_reraises_http_errors(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "boom"})

    client = _rest_client(handler)
    monkeypatch.setattr(logging.getLogger("smart_recipe"), "propagate", True)

    with caplog.at_level(logging.ERROR, logger="smart_recipe"):
        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(client.call("/api/boom", method="post", payload={}))

    assert "making a post REST call to -> /api/boom" in caplog.text


def test_rest_client_rejects_unknown_method() -> None:
    client = _rest_client(lambda request: httpx.Response(200))

    with pytest.raises(ValueError, match="Unsupported REST method"):
        asyncio.run(client.call("/api/x", method="patch"))


def test_google_client_builds_authorization_url() -> None:
    client = HttpxGoogleOAuthClient(
        client_id="cid", client_secret="secret", http_client=httpx.AsyncClient()
    )

    url = httpx.URL(client.authorization_url("http://app.test/cb", "state-1"))

    assert url.host == "accounts.google.com"
    assert url.params["client_id"] == "cid"
    assert url.params["redirect_uri"] == "http://app.test/cb"
    assert url.params["state"] == "state-1"
    assert url.params["response_type"] == "code"
    asyncio.run(client.close())


def test_google_client_exchanges_code_and_fetches_userinfo() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/token":
            form = parse_qs(request.content.decode())
            assert form["code"] == ["abc"]
            assert form["grant_type"] == ["authorization_code"]
            return httpx.Response(200, json={"access_token": "at-1"})
        assert request.headers["authorization"] == "Bearer at-1"
        return httpx.Response(200, json={"sub": "123", "email": "a@example.com"})

    client = HttpxGoogleOAuthClient(
        client_id="cid",
        client_secret="secret",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    tokens = asyncio.run(client.exchange_code("abc", "http://app.test/cb"))
    userinfo = asyncio.run(client.fetch_userinfo(str(tokens["access_token"])))

    assert userinfo["sub"] == "123"


def test_audio_loader_downloads_bytes() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"ID3audio")

    loader = HttpxAudioLoader(
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )

    assert asyncio.run(loader.preload("http://cdn.test/a.mp3")) == b"ID3audio"


def test_audio_loader_rejects_missing_resource() -> None:
    loader = HttpxAudioLoader(
        http_client=httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(404))
        )
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(loader.preload("http://cdn.test/missing.mp3"))
