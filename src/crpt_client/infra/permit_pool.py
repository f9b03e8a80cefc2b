from __future__ import annotations

import logging
import time
from collections import deque
from contextlib import contextmanager
from threading import Condition, Event, Thread, current_thread
from typing import Iterator, Optional

from ..core.domain.cancellation import CancellationToken
from ..core.domain.enums import PoolState
from ..core.domain.errors import CancelledError
from ..core.ports.permit_pool_port import PermitPoolPort

logger = logging.getLogger(__name__)


class PermitPool(PermitPoolPort):
    """Fixed-capacity permit pool reset to full capacity once per period.

    This approximates "at most ``limit`` operations per period" with fixed
    period boundaries rather than a true sliding window: a refill discards any
    history, so a burst right before a boundary and another right after it
    can both proceed.

    Waiters are served in arrival order. A background daemon thread calls
    ``refill()`` one full period after construction and every period after that
    until ``close()``.

    Example:
        with PermitPool(period=1.0, limit=5) as pool:
            with pool.permit():
                send()
    """

    def __init__(self, period: float, limit: int) -> None:
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        if period <= 0:
            raise ValueError(f"period must be > 0, got {period}")
        self._capacity = int(limit)
        self._period = float(period)
        self._available = self._capacity
        self._cond = Condition()
        self._waiters: deque[object] = deque()
        self._state = PoolState.ACTIVE
        self._stop = Event()
        self._timer = Thread(target=self._run_refills, name="permit-pool-refill", daemon=True)
        self._timer.start()
        logger.info(f"Permit pool started: capacity={self._capacity}, period={self._period}s")

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def period(self) -> float:
        return self._period

    @property
    def available(self) -> int:
        with self._cond:
            return self._available

    @property
    def waiting(self) -> int:
        with self._cond:
            return len(self._waiters)

    @property
    def state(self) -> PoolState:
        return self._state

    def acquire(self, timeout: Optional[float] = None, cancel: Optional[CancellationToken] = None) -> None:
        """Take one permit, blocking while none is available or older waiters are queued.

        Raises:
            CancelledError: if ``cancel`` is set, ``timeout`` elapses or the pool is
                closed before a permit is granted. The pool is left unchanged.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            self._check_open(cancel)
            if self._available > 0 and not self._waiters:
                self._available -= 1
                logger.debug(f"Permit acquired ({self._available}/{self._capacity} left)")
                return

            ticket = object()
            self._waiters.append(ticket)
            if cancel is not None:
                cancel.add_callback(self._wake_all)
            logger.debug(f"Waiting for a permit ({len(self._waiters)} queued)")
            try:
                while True:
                    self._check_open(cancel)
                    if self._waiters[0] is ticket and self._available > 0:
                        self._available -= 1
                        logger.debug(f"Permit acquired after wait ({self._available}/{self._capacity} left)")
                        return
                    remaining = None
                    if deadline is not None:
                        remaining = deadline - time.monotonic()
                        if remaining <= 0:
                            raise CancelledError(f"Timed out after {timeout}s waiting for a permit")
                    self._cond.wait(remaining)
            finally:
                self._waiters.remove(ticket)
                if cancel is not None:
                    cancel.remove_callback(self._wake_all)
                # the next waiter may now be at the head
                self._cond.notify_all()

    def release(self) -> None:
        with self._cond:
            self._available = min(self._capacity, self._available + 1)
            logger.debug(f"Permit released ({self._available}/{self._capacity} available)")
            self._cond.notify_all()

    def refill(self) -> None:
        """Set available permits back to capacity. Not additive."""
        with self._cond:
            self._available = self._capacity
            logger.debug(f"Permit pool refilled to {self._capacity} ({len(self._waiters)} waiting)")
            self._cond.notify_all()

    @contextmanager
    def permit(
        self, timeout: Optional[float] = None, cancel: Optional[CancellationToken] = None
    ) -> Iterator[None]:
        # acquire stays outside the try: a caller that never got a permit must not release one
        self.acquire(timeout=timeout, cancel=cancel)
        try:
            yield
        finally:
            self.release()

    def close(self) -> None:
        """Stop refilling, wake every waiter with CancelledError and reject new acquires.

        Permits held by in-flight callers can still be released after close.
        """
        with self._cond:
            if self._state is PoolState.STOPPED:
                return
            self._state = PoolState.STOPPED
            pending = len(self._waiters)
            self._cond.notify_all()
        self._stop.set()
        if self._timer is not current_thread():
            self._timer.join()
        logger.info(f"Permit pool stopped ({pending} pending waiter(s) cancelled)")

    def __enter__(self) -> PermitPool:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"PermitPool(capacity={self._capacity}, period={self._period}, "
            f"available={self._available}, state={self._state.name})"
        )

    def _check_open(self, cancel: Optional[CancellationToken]) -> None:
        if self._state is PoolState.STOPPED:
            raise CancelledError("Permit pool is stopped")
        if cancel is not None and cancel.cancelled:
            raise CancelledError("Cancelled while waiting for a permit")

    def _wake_all(self) -> None:
        with self._cond:
            self._cond.notify_all()

    def _run_refills(self) -> None:
        # fixed-rate schedule: deadlines advance by whole periods
        next_run = time.monotonic() + self._period
        while not self._stop.wait(max(0.0, next_run - time.monotonic())):
            self.refill()
            next_run += self._period
            now = time.monotonic()
            if next_run <= now:
                skipped = int((now - next_run) // self._period) + 1
                logger.warning(f"Refill timer fell behind; skipping {skipped} tick(s)")
                next_run += skipped * self._period
