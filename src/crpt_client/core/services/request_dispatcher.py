from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional, Sequence, Tuple, Union

from ..domain.cancellation import CancellationToken
from ..domain.errors import (
    BadStatusError,
    CancelledError,
    InvalidInputError,
    SubmissionError,
    TransportError,
)
from ..domain.models import Document, SubmissionResult
from ..ports.permit_pool_port import PermitPoolPort
from ..ports.serializer_port import SerializerPort
from ..ports.transport_port import TransportPort

logger = logging.getLogger(__name__)

SUCCESS_STATUS = 200

Outcome = Union[SubmissionResult, SubmissionError]


class RequestDispatcher:
    """Send one create-document request per admitted call.

    Every call takes a permit from the pool before encoding and sending, and
    gives it back on every exit path. Failures are raised as SubmissionError
    subclasses; nothing is retried here.
    """

    def __init__(
        self,
        permit_pool: PermitPoolPort,
        serializer: SerializerPort,
        transport: TransportPort,
        endpoint_url: str,
        max_workers: Optional[int] = None,
    ) -> None:
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self._pool = permit_pool
        self._serializer = serializer
        self._transport = transport
        self._endpoint_url = endpoint_url
        self._max_workers = max_workers

    @property
    def endpoint_url(self) -> str:
        return self._endpoint_url

    def submit(
        self,
        document: Optional[Document],
        signature: Optional[str],
        *,
        timeout: Optional[float] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> SubmissionResult:
        """Submit a signed document and return the confirmed result.

        Args:
            document: Non-empty document to create.
            signature: Non-blank signature of the document.
            timeout: Maximum seconds to wait for a permit. None waits indefinitely.
            cancel: Optional token; once set, a pending wait or a not-yet-started send is abandoned.

        Raises:
            InvalidInputError: document or signature missing, before any permit or network activity.
            SerializationError: the request body could not be built.
            CancelledError: the wait for a permit was abandoned, or cancel was set before sending.
            TransportError: the request could not be completed.
            BadStatusError: the endpoint answered with a status other than 200.
        """
        _validate(document, signature)

        with self._pool.permit(timeout=timeout, cancel=cancel):
            body = self._serializer.encode(document, signature)
            if cancel is not None and cancel.cancelled:
                raise CancelledError("Cancelled before the request was sent")

            started = time.monotonic()
            try:
                response = self._transport.post(
                    self._endpoint_url,
                    body,
                    headers={"Content-Type": self._serializer.content_type},
                )
            except SubmissionError:
                raise
            except Exception as e:
                logger.warning(f"Create-document call to {self._endpoint_url} failed: {e}")
                raise TransportError(f"Unexpected error during API call: {e}") from e
            elapsed = time.monotonic() - started

        if response.status_code != SUCCESS_STATUS:
            logger.warning(f"Create-document call returned status {response.status_code}")
            raise BadStatusError(response.status_code, response.content)

        logger.debug(f"Document created in {elapsed:.3f}s")
        return SubmissionResult(status_code=response.status_code, body=response.content, elapsed_seconds=elapsed)

    def submit_many(
        self,
        items: Iterable[Tuple[Optional[Document], Optional[str]]],
        *,
        timeout: Optional[float] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> list[Outcome]:
        """Submit several documents concurrently and return one outcome per item, in input order.

        A failed item yields its SubmissionError instead of aborting the batch.
        """
        pairs: Sequence[Tuple[Optional[Document], Optional[str]]] = list(items)
        if not pairs:
            return []

        def _one(pair: Tuple[Optional[Document], Optional[str]]) -> Outcome:
            try:
                return self.submit(pair[0], pair[1], timeout=timeout, cancel=cancel)
            except SubmissionError as e:
                return e

        workers = min(self._max_workers or self._pool.capacity, len(pairs))
        logger.info(f"Submitting {len(pairs)} documents with {workers} worker(s)")
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="crpt-dispatch") as executor:
            outcomes = list(executor.map(_one, pairs))

        failed = sum(1 for o in outcomes if isinstance(o, SubmissionError))
        if failed:
            logger.warning(f"{failed} of {len(outcomes)} submissions failed")
        return outcomes


def _validate(document: Optional[Document], signature: Optional[str]) -> None:
    if document is None:
        raise InvalidInputError("Document must not be None")
    if not isinstance(document, Document):
        raise InvalidInputError(f"Document must be a Document, got {type(document).__name__}")
    if document.is_empty:
        raise InvalidInputError("Document must not be empty")
    if signature is None:
        raise InvalidInputError("Signature must not be None")
    if not isinstance(signature, str) or not signature.strip():
        raise InvalidInputError("Signature must be a non-blank string")
