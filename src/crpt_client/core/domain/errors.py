from __future__ import annotations

from typing import Optional

from .enums import ErrorKind


class SubmissionError(Exception):
    """Base class for every failure surfaced by a document submission.

    The ``kind`` tag lets callers tell apart requests that were never sent
    (invalid input, serialization), requests that were sent but failed
    (transport, bad status) and callers that gave up (cancelled).
    """

    kind: Optional[ErrorKind] = None

    @property
    def sent(self) -> bool:
        return self.kind is not None and self.kind.sent


class InvalidInputError(SubmissionError, ValueError):
    kind = ErrorKind.INVALID_INPUT


class SerializationError(SubmissionError):
    kind = ErrorKind.SERIALIZATION


class TransportError(SubmissionError):
    kind = ErrorKind.TRANSPORT


class BadStatusError(SubmissionError):
    kind = ErrorKind.BAD_STATUS

    def __init__(self, status_code: int, body: Optional[bytes] = None) -> None:
        super().__init__(f"API returned bad status code: {status_code}")
        self.status_code = status_code
        self.body = body


class CancelledError(SubmissionError):
    kind = ErrorKind.CANCELLED
