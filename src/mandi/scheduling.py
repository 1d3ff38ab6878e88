"""Cancellable periodic tasks for a single-threaded event loop."""

from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable

logger = logging.getLogger(__name__)


class PeriodicHandle(ABC):
    """Owned reference to one repeating task."""

    @property
    @abstractmethod
    def active(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def cancel(self) -> None:
        """Stop the task. Idempotent; no callback runs after this returns."""
        raise NotImplementedError


class Scheduler(ABC):
    @abstractmethod
    def call_every(self, interval: float, callback: Callable[[], None]) -> PeriodicHandle:
        raise NotImplementedError


class _PollingHandle(PeriodicHandle):
    def __init__(self, interval: float, callback: Callable[[], None], due: float):
        self.interval = interval
        self.callback = callback
        self.due = due
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False


class PollingScheduler(Scheduler):
    """Deadline-based scheduler driven by explicit ``run_pending()`` calls.

    Suits hosts that re-run on their own cadence (a Streamlit fragment, a
    test advancing a fake clock). A task that fell several intervals behind
    fires once per missed interval, oldest first.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._handles: list[_PollingHandle] = []

    def call_every(self, interval: float, callback: Callable[[], None]) -> PeriodicHandle:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        handle = _PollingHandle(interval, callback, due=self.clock() + interval)
        self._handles.append(handle)
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for h in self._handles if h.active)

    def run_pending(self) -> int:
        """Fire every due callback; returns how many ran."""
        now = self.clock()
        fired = 0
        self._handles = [h for h in self._handles if h.active]
        for handle in list(self._handles):
            while handle.active and handle.due <= now:
                handle.due += handle.interval
                handle.callback()
                fired += 1
        return fired


class _AsyncioHandle(PeriodicHandle):
    def __init__(self, loop: asyncio.AbstractEventLoop, interval: float, callback: Callable[[], None]):
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._timer: asyncio.TimerHandle | None = loop.call_later(interval, self._fire)

    def _fire(self) -> None:
        if self._timer is None:
            return
        self._timer = self._loop.call_later(self._interval, self._fire)
        self._callback()

    @property
    def active(self) -> bool:
        return self._timer is not None

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


class AsyncioScheduler(Scheduler):
    """Periodic tasks on an asyncio loop, re-armed with ``call_later`` each run."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_every(self, interval: float, callback: Callable[[], None]) -> PeriodicHandle:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        loop = self._loop or asyncio.get_running_loop()
        return _AsyncioHandle(loop, interval, callback)
