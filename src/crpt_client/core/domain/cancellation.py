from __future__ import annotations

import logging
from threading import Lock
from typing import Callable

logger = logging.getLogger(__name__)


class CancellationToken:
    """One-shot cancellation flag shared between a caller and whoever waits on its behalf.

    Waiters register a callback to be woken when ``cancel()`` is called from another
    thread. Callbacks run on the cancelling thread, outside the token's lock.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._cancelled = False
        self._callbacks: list[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            callbacks = list(self._callbacks)
        logger.debug(f"Cancellation requested; notifying {len(callbacks)} waiter(s)")
        for cb in callbacks:
            cb()

    def add_callback(self, cb: Callable[[], None]) -> None:
        with self._lock:
            self._callbacks.append(cb)

    def remove_callback(self, cb: Callable[[], None]) -> None:
        with self._lock:
            try:
                self._callbacks.remove(cb)
            except ValueError:
                pass
