"""Periodic scheduler protocol and implementations.

A CountdownTimer never talks to a clock directly. It registers a
callback with a PeriodicScheduler and cancels it again, which keeps the
state machine deterministic under test (ManualScheduler) and usable in a
real process (ThreadingScheduler).
"""
from __future__ import annotations

import itertools
import logging
import threading
import time
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from tick_countdown.types import TickCallback, TickHandle

logger = logging.getLogger(__name__)


def _check_period(period_ms: int) -> None:
    if period_ms <= 0:
        raise ValueError("period_ms must be positive")


@runtime_checkable
class PeriodicScheduler(Protocol):
    """Protocol for schedulers that invoke a callback on a fixed period.

    After cancel_periodic() returns, no further invocation of that
    registration may start. Cancelling None, an unknown handle, or an
    already-cancelled handle is a no-op.
    """

    def register_periodic(self, callback: TickCallback, period_ms: int) -> TickHandle:
        """Invoke callback() once per period_ms until cancelled. Returns an opaque handle."""
        ...

    def cancel_periodic(self, handle: TickHandle | None) -> None:
        """Stop future invocations for handle."""
        ...


@dataclass
class _Registration:
    handle: int
    callback: TickCallback
    period_ms: int
    next_due_ms: int


class ManualScheduler:
    """Deterministic scheduler driven by an explicit virtual clock.

    Nothing fires until advance() is called. Each elapsed period produces
    exactly one invocation; late periods are never coalesced.
    """

    def __init__(self) -> None:
        self._now_ms = 0
        self._ids = itertools.count(1)
        self._registrations: dict[int, _Registration] = {}

    @property
    def now_ms(self) -> int:
        return self._now_ms

    @property
    def active_count(self) -> int:
        return len(self._registrations)

    def is_active(self, handle: TickHandle | None) -> bool:
        return handle in self._registrations

    def register_periodic(self, callback: TickCallback, period_ms: int) -> int:
        _check_period(period_ms)
        handle = next(self._ids)
        self._registrations[handle] = _Registration(
            handle=handle,
            callback=callback,
            period_ms=period_ms,
            next_due_ms=self._now_ms + period_ms,
        )
        return handle

    def cancel_periodic(self, handle: TickHandle | None) -> None:
        if handle is None:
            return
        self._registrations.pop(handle, None)

    def advance(self, ms: int) -> int:
        """Move the clock forward by ms, firing everything that falls due.

        Registrations fire in due-time order, ties broken by registration
        order. Callbacks may register or cancel while the clock is moving.
        Returns the number of callbacks invoked.
        """
        if ms < 0:
            raise ValueError("cannot advance by a negative amount")
        target = self._now_ms + ms
        fired = 0
        while True:
            due = [r for r in self._registrations.values() if r.next_due_ms <= target]
            if not due:
                break
            reg = min(due, key=lambda r: (r.next_due_ms, r.handle))
            self._now_ms = reg.next_due_ms
            reg.next_due_ms += reg.period_ms
            reg.callback()
            fired += 1
        self._now_ms = target
        return fired

    def fire(self, handle: TickHandle | None) -> bool:
        """Deliver one invocation to a live registration. Returns False if not live."""
        reg = self._registrations.get(handle)
        if reg is None:
            return False
        reg.callback()
        return True


@dataclass
class _Worker:
    handle: int
    stop: threading.Event
    thread: threading.Thread


class ThreadingScheduler:
    """Wall-clock scheduler running each registration on a daemon thread.

    Invocations and cancellations share one re-entrant lock: cancelling
    from another thread waits for an in-flight callback to finish, and a
    callback may cancel (or re-register) from inside its own invocation.
    Callback exceptions are logged and the registration keeps running.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._ids = itertools.count(1)
        self._workers: dict[int, _Worker] = {}

    @property
    def active_count(self) -> int:
        with self._lock:
            return len(self._workers)

    def register_periodic(self, callback: TickCallback, period_ms: int) -> int:
        _check_period(period_ms)
        stop = threading.Event()
        with self._lock:
            handle = next(self._ids)
            thread = threading.Thread(
                target=self._run,
                args=(handle, callback, period_ms / 1000.0, stop),
                daemon=True,
                name=f"tick-countdown-{handle}",
            )
            self._workers[handle] = _Worker(handle=handle, stop=stop, thread=thread)
        thread.start()
        logger.debug("Registered periodic %d every %dms", handle, period_ms)
        return handle

    def cancel_periodic(self, handle: TickHandle | None) -> None:
        if handle is None:
            return
        with self._lock:
            worker = self._workers.pop(handle, None)
            if worker is None:
                return
            worker.stop.set()
        logger.debug("Cancelled periodic %d", handle)

    def shutdown(self, timeout: float | None = None) -> None:
        """Cancel every live registration and wait for the worker threads to exit."""
        with self._lock:
            workers = list(self._workers.values())
            self._workers.clear()
            for worker in workers:
                worker.stop.set()
        current = threading.current_thread()
        for worker in workers:
            if worker.thread is not current:
                worker.thread.join(timeout)

    def __enter__(self) -> ThreadingScheduler:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def _run(
        self,
        handle: int,
        callback: TickCallback,
        period_s: float,
        stop: threading.Event,
    ) -> None:
        deadline = time.monotonic() + period_s
        while True:
            if stop.wait(max(0.0, deadline - time.monotonic())):
                return
            with self._lock:
                if stop.is_set():
                    return
                try:
                    callback()
                except Exception:
                    logger.exception("Periodic %d callback raised", handle)
            deadline += period_s
