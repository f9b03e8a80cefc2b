from __future__ import annotations

import httpx
import pytest

from crpt_client.infra.http_client import HttpClient


def _client_with(handler) -> HttpClient:
    hc = HttpClient()
    hc._client = httpx.Client(transport=httpx.MockTransport(handler))
    return hc


def test_http_client_post_returns_status_and_content():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=b'{"value": "ok"}')

    hc = _client_with(handler)
    resp = hc.post("http://x/create", b'{"a": 1}', headers={"Content-Type": "application/json"})

    assert resp.status_code == 200
    assert resp.content == b'{"value": "ok"}'
    assert seen[0].method == "POST"
    assert seen[0].read() == b'{"a": 1}'
    assert seen[0].headers["content-type"] == "application/json"


def test_http_client_post_does_not_raise_on_error_status():
    hc = _client_with(lambda request: httpx.Response(500, content=b"oops"))
    resp = hc.post("http://x/create", b"{}")
    assert resp.status_code == 500
    assert resp.content == b"oops"


def test_http_client_post_propagates_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    hc = _client_with(handler)
    with pytest.raises(httpx.ConnectError):
        hc.post("http://x/create", b"{}")


def test_http_client_follows_redirects():
    """Test that HttpClient is configured to follow redirects (301, 302, etc.)."""
    hc = HttpClient()
    assert hc._client.follow_redirects is True
    hc.close()


def test_http_client_applies_timeout():
    with HttpClient(timeout_seconds=3.5, max_connections=4) as hc:
        assert hc._client.timeout.connect == 3.5
        assert hc._client.timeout.read == 3.5
