from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    content: bytes = b""


class TransportPort(Protocol):
    def post(self, url: str, body: bytes, headers: Optional[Mapping[str, str]] = None) -> TransportResponse:
        """Send body to url with a POST and return the raw response."""
        ...
