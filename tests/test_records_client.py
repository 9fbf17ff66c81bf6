from __future__ import annotations

import httpx
import pytest

from roster.infra.http.records_client import ApiError, RecordsApiClient


def make_client(transport: httpx.BaseTransport, *, retries: int = 0) -> RecordsApiClient:
    return RecordsApiClient(
        baseUrl="https://roster.local/",
        retries=retries,
        retryBackoffSeconds=0,
        transport=transport,
    )


def test_get_json_returns_payload_and_passes_params():
    def responder(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/api/employees"
        assert request.url.params["page"] == "2"
        return httpx.Response(200, json=[{"name": "A"}])

    client = make_client(httpx.MockTransport(responder))

    assert client.getJson("/api/employees", params={"page": 2}) == [{"name": "A"}]
    assert client.getRetryAttempts() == 0


def test_get_json_retries_on_503_and_succeeds():
    calls = {"count": 0}

    def responder(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] == 1:
            return httpx.Response(503, text="busy")
        return httpx.Response(200, json={"content": []})

    client = make_client(httpx.MockTransport(responder), retries=1)

    assert client.getJson("/api/timecards") == {"content": []}
    assert client.getRetryAttempts() == 1


def test_get_json_raises_http_error_without_retry_on_404():
    def responder(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="missing")

    client = make_client(httpx.MockTransport(responder), retries=3)

    with pytest.raises(ApiError) as exc:
        client.getJson("/api/unknown")

    assert exc.value.code == "HTTP_404"
    assert exc.value.status_code == 404
    assert exc.value.body_snippet == "missing"
    assert client.getRetryAttempts() == 0


def test_get_json_raises_on_invalid_json():
    def responder(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>login</html>")

    client = make_client(httpx.MockTransport(responder))

    with pytest.raises(ApiError) as exc:
        client.getJson("/api/employees")

    assert exc.value.code == "INVALID_JSON"


def test_get_json_raises_network_error_after_retries():
    def responder(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom")

    with make_client(httpx.MockTransport(responder), retries=2) as client:
        with pytest.raises(ApiError) as exc:
            client.getJson("/api/employees")

    assert exc.value.code == "NETWORK_ERROR"
    assert client.getRetryAttempts() == 2
