"""crpt_client package: app/core/infra/config.

Expose library-friendly API client at the package level.
"""

from .app.api import AppConfig, CrptClient
from .core import (
    BadStatusError,
    CancellationToken,
    CancelledError,
    Document,
    ErrorKind,
    InvalidInputError,
    PoolState,
    SerializationError,
    SubmissionError,
    SubmissionResult,
    TransportError,
)
from .infra.permit_pool import PermitPool

import logging

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    "CrptClient",
    "AppConfig",
    "PermitPool",
    "Document",
    "SubmissionResult",
    "CancellationToken",
    "ErrorKind",
    "PoolState",
    "SubmissionError",
    "InvalidInputError",
    "SerializationError",
    "TransportError",
    "BadStatusError",
    "CancelledError",
]
