from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from .container import Container
from ..config.settings import AppConfig
from ..core.domain.cancellation import CancellationToken
from ..core.domain.errors import SubmissionError
from ..core.domain.models import Document, SubmissionResult
from ..core.services.request_dispatcher import RequestDispatcher
from ..infra.permit_pool import PermitPool

DocumentLike = Union[Document, Mapping[str, Any], None]


class CrptClient:
    """Client for creating documents through the CRPT API under a shared rate limit.

    The permit pool and HTTP connection pool are created once and shared by every
    call, from any number of threads, until the client is closed.

    Example:
        # Using default configuration (from environment variables)
        client = CrptClient()
        client.create_document({"doc_id": "42"}, signature="base64-signature")
        client.close()

        # Using context manager (recommended)
        with CrptClient(limit=5, period_seconds=1.0) as client:
            client.create_document(Document({"doc_id": "42"}), "base64-signature")
    """

    def __init__(
        self,
        *,
        period_seconds: float | None = None,
        limit: int | None = None,
        endpoint_url: str | None = None,
        timeout_seconds: float | None = None,
        max_workers: int | None = None,
    ):
        """Initialize the client.

        Args:
            period_seconds: Refill period of the permit pool.
                           If None, uses CRPT_CLIENT_PERIOD_SECONDS or default (1.0).
            limit: Permits available per period.
                   If None, uses CRPT_CLIENT_LIMIT or default (10).
            endpoint_url: Create-document URL.
                          If None, uses CRPT_CLIENT_ENDPOINT_URL or the public CRPT endpoint.
            timeout_seconds: HTTP timeout for one call.
                             If None, uses CRPT_CLIENT_TIMEOUT_SECONDS or default (20).
            max_workers: Worker threads for create_documents and HTTP connections.
                         If None, uses CRPT_CLIENT_MAX_WORKERS or the limit.
        """
        self._container = Container()

        # Build config dict with only provided values
        config_dict: dict[str, Any] = {}
        if period_seconds is not None:
            config_dict["period_seconds"] = period_seconds
        if limit is not None:
            config_dict["limit"] = limit
        if endpoint_url is not None:
            config_dict["endpoint_url"] = endpoint_url
        if timeout_seconds is not None:
            config_dict["timeout_seconds"] = timeout_seconds
        if max_workers is not None:
            config_dict["max_workers"] = max_workers

        # Re-read the environment; the class-level config was loaded at import time
        self._container.config.from_pydantic(AppConfig(**config_dict))
        self._container.init_resources()
        self._pool: PermitPool = self._container.permit_pool()
        self._dispatcher: RequestDispatcher = self._container.dispatcher()

    @property
    def permit_pool(self) -> PermitPool:
        # the provider would build a fresh pool after shutdown_resources
        return self._pool

    def create_document(
        self,
        document: DocumentLike,
        signature: Optional[str],
        *,
        timeout: Optional[float] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> SubmissionResult:
        """Create one document, blocking while the rate limit is exhausted.

        Args:
            document: Document, or a plain mapping wrapped into one.
            signature: Signature of the document.
            timeout: Maximum seconds to wait for a permit. None waits indefinitely.
            cancel: Optional token to abandon the wait from another thread.

        Returns:
            SubmissionResult for a 200 response.

        Raises:
            SubmissionError: one of InvalidInputError, SerializationError, TransportError,
                BadStatusError or CancelledError.

        Example:
            with CrptClient() as client:
                try:
                    client.create_document({"doc_id": "42"}, "signature")
                except BadStatusError as e:
                    print(f"Rejected with {e.status_code}")
        """
        return self._dispatcher.submit(_to_document(document), signature, timeout=timeout, cancel=cancel)

    def create_documents(
        self,
        items: Iterable[Tuple[DocumentLike, Optional[str]]],
        *,
        timeout: Optional[float] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> list[Union[SubmissionResult, SubmissionError]]:
        """Create several documents concurrently.

        Returns one entry per item in input order: the SubmissionResult, or the
        SubmissionError raised for that item.
        """
        pairs = [(_to_document(d), s) for d, s in items]
        return self._dispatcher.submit_many(pairs, timeout=timeout, cancel=cancel)

    def close(self) -> None:
        """Stop the refill timer and close the HTTP client.

        Pending permit waits are cancelled.
        """
        self._container.shutdown_resources()

    def __enter__(self) -> CrptClient:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()


def _to_document(document: DocumentLike) -> Optional[Document]:
    if document is None or isinstance(document, Document):
        return document
    if isinstance(document, Mapping):
        return Document(document)
    # leave other types for the dispatcher's validation to reject
    return document  # type: ignore[return-value]


__all__ = [
    "CrptClient",
    "AppConfig",
]
