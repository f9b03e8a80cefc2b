from __future__ import annotations

import logging
from typing import Mapping, Optional

import httpx

from ..core.ports.transport_port import TransportPort, TransportResponse

logger = logging.getLogger(__name__)


class HttpClient(TransportPort):
    def __init__(
        self,
        base_headers: Optional[Mapping[str, str]] = None,
        timeout_seconds: float = 20.0,
        max_connections: Optional[int] = None,
    ) -> None:
        self._client = httpx.Client(
            timeout=timeout_seconds,
            headers=dict(base_headers or {}),
            follow_redirects=True,
            max_redirects=10,
            limits=httpx.Limits(max_connections=max_connections, max_keepalive_connections=max_connections),
        )

    def post(self, url: str, body: bytes, headers: Optional[Mapping[str, str]] = None) -> TransportResponse:
        logger.debug(f"POST {url} ({len(body)} bytes)")
        resp = self._client.post(url, content=body, headers=dict(headers or {}))
        logger.debug(f"POST {url} -> {resp.status_code}")
        return TransportResponse(status_code=resp.status_code, content=resp.content)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
