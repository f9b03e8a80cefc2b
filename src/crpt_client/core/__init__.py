"""Domain types, ports and services for document submission."""

from .domain.cancellation import CancellationToken
from .domain.enums import ErrorKind, PoolState
from .domain.errors import (
    BadStatusError,
    CancelledError,
    InvalidInputError,
    SerializationError,
    SubmissionError,
    TransportError,
)
from .domain.models import Document, SubmissionResult

__all__ = [
    "CancellationToken",
    "ErrorKind",
    "PoolState",
    "SubmissionError",
    "InvalidInputError",
    "SerializationError",
    "TransportError",
    "BadStatusError",
    "CancelledError",
    "Document",
    "SubmissionResult",
]
