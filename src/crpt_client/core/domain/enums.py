from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    INVALID_INPUT = "INVALID_INPUT"
    SERIALIZATION = "SERIALIZATION"
    TRANSPORT = "TRANSPORT"
    BAD_STATUS = "BAD_STATUS"
    CANCELLED = "CANCELLED"

    @property
    def sent(self) -> bool:
        """True when a failure of this kind means the request reached the transport."""
        return self in (ErrorKind.TRANSPORT, ErrorKind.BAD_STATUS)


class PoolState(Enum):
    ACTIVE = "ACTIVE"
    STOPPED = "STOPPED"
