from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Optional, Protocol

from ..domain.cancellation import CancellationToken


class PermitPoolPort(Protocol):
    @property
    def capacity(self) -> int:
        """Maximum number of permits the pool holds."""
        ...

    def acquire(self, timeout: Optional[float] = None, cancel: Optional[CancellationToken] = None) -> None:
        """Block until a permit is available, then take it. Raise CancelledError if abandoned."""

    def release(self) -> None:
        """Return one permit, never exceeding capacity."""

    def refill(self) -> None:
        """Reset the pool to full capacity."""

    def permit(
        self, timeout: Optional[float] = None, cancel: Optional[CancellationToken] = None
    ) -> AbstractContextManager[None]:
        """Hold one permit for the duration of a with-block."""
        ...
