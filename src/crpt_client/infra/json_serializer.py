from __future__ import annotations

import logging

from pydantic import ValidationError

from ..core.domain.errors import SerializationError
from ..core.domain.models import Document
from ..core.ports.serializer_port import SerializerPort
from .schemas import CreateDocumentRequest

logger = logging.getLogger(__name__)


class JsonSerializer(SerializerPort):
    content_type = "application/json"

    def build_request(self, document: Document, signature: str) -> CreateDocumentRequest:
        try:
            return CreateDocumentRequest(document=document.to_dict(), signature=signature)
        except ValidationError as e:
            raise SerializationError(f"Invalid create-document request: {e}") from e

    def encode(self, document: Document, signature: str) -> bytes:
        request = self.build_request(document, signature)
        try:
            body = request.model_dump_json().encode("utf-8")
        except (ValueError, TypeError) as e:  # PydanticSerializationError is a ValueError
            raise SerializationError(f"Document cannot be encoded as JSON: {e}") from e
        logger.debug(f"Encoded create-document request ({len(body)} bytes)")
        return body
