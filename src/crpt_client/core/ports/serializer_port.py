from __future__ import annotations

from typing import Protocol

from ..domain.models import Document


class SerializerPort(Protocol):
    content_type: str

    def encode(self, document: Document, signature: str) -> bytes:
        """Return the exact request body. Raise SerializationError if it cannot be built."""
        ...
