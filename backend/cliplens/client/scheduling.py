"""
Timers and cancellation for per-card async work.

Each hydration controller owns one CancellationToken per mount. Scheduled
callbacks and in-flight requests check the token before touching state,
so nothing is applied to a card after it has been torn down.
"""
import asyncio
from typing import Callable, Optional


class CancellationToken:
    """Invalidated exactly once, when its owner is torn down."""

    def __init__(self):
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class TimerHandle:
    """Handle for a scheduled callback."""

    def cancel(self) -> None:
        raise NotImplementedError


class Scheduler:
    """Schedules callbacks after a delay in seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        raise NotImplementedError


class AsyncioScheduler(Scheduler):
    """Scheduler backed by the running event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)
