"""tests/conftest.py

Common fixtures for the entire test suite.
"""

import time
from typing import Callable

import httpx
import pytest
from typer.testing import CliRunner

_ENV_VARS = (
    "CRPT_CLIENT_PERIOD_SECONDS",
    "CRPT_CLIENT_LIMIT",
    "CRPT_CLIENT_ENDPOINT_URL",
    "CRPT_CLIENT_TIMEOUT_SECONDS",
    "CRPT_CLIENT_MAX_WORKERS",
)


@pytest.fixture(scope="session")
def runner() -> CliRunner:
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture
def endpoint_url() -> str:
    return "https://crpt.test/api/v3/lk/documents/create"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep CRPT_CLIENT_* variables from the developer's shell out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def wait_until() -> Callable[..., bool]:
    """Poll a predicate until it holds or the timeout elapses."""

    def _wait(predicate: Callable[[], bool], timeout: float = 2.0, interval: float = 0.005) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if predicate():
                return True
            time.sleep(interval)
        return predicate()

    return _wait


@pytest.fixture
def mock_httpx_client(monkeypatch):
    """
    Replaces httpx.Client with a mock that uses a MockTransport.

    Returns a handler function that tests can use to register mock responses.
    Every request is logged as (method, url, body, headers) on ``add_response.calls``.
    """
    responses = {}
    calls_log: list[tuple[str, str, bytes, httpx.Headers]] = []
    original_client = httpx.Client

    def add_response(
        url: str,
        method: str = "POST",
        status_code: int = 200,
        content: bytes = b"{}",
    ):
        """Register a mock response for a given URL and method."""
        responses[(method.upper(), url)] = (status_code, content)

    def mock_transport(request: httpx.Request) -> httpx.Response:
        """The transport logic that returns registered responses or a 404."""
        key = (request.method, str(request.url))
        calls_log.append((request.method, str(request.url), request.read(), request.headers))
        if key in responses:
            status, body = responses[key]
            return httpx.Response(status, content=body, headers={"Content-Length": str(len(body))})

        return httpx.Response(404, text=f"Mock URL not found: {request.method} {request.url}")

    # Patch httpx.Client to always use our mock transport
    def patched_client(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(mock_transport)
        return original_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "Client", patched_client)
    add_response.calls = calls_log  # type: ignore[attr-defined]
    return add_response
