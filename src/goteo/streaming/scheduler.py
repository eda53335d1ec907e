"""Timer scheduling for the streaming engine.

The engine only needs "call this later" and "cancel that call". Any object
with asyncio's ``call_later`` signature works as a Scheduler, including every
asyncio event loop. VirtualClock is a deterministic stand-in that advances
only when told to, for tests and headless callers.

Thread Safety:
Schedulers are driven from one logical thread. Neither asyncio loops nor
VirtualClock may be shared across threads.

"""

from __future__ import annotations

import asyncio
import heapq
from collections.abc import Callable
from typing import Any, Protocol

from goteo.errors import StreamError

# Virtual times are rounded so repeated float additions land on the same tick
_TIME_PRECISION = 9


class TimerHandle(Protocol):
    """Cancellation handle for one scheduled callback."""

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback after a delay in seconds."""

    def call_later(
        self, delay: float, callback: Callable[..., object], *args: Any
    ) -> TimerHandle: ...


def running_loop_scheduler() -> Scheduler:
    """Return the running asyncio event loop as a Scheduler.

    Raises:
        StreamError: If called outside a running event loop.

    """
    try:
        return asyncio.get_running_loop()
    except RuntimeError as exc:
        msg = "No running event loop; pass a scheduler to StreamingEngine"
        raise StreamError(msg) from exc


class VirtualTimer:
    """Handle for a callback scheduled on a VirtualClock."""

    __slots__ = ("when", "_callback", "_args", "_cancelled")

    def __init__(self, when: float, callback: Callable[..., object], args: tuple[Any, ...]) -> None:
        self.when = when
        self._callback = callback
        self._args = args
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled

    def _run(self) -> None:
        self._callback(*self._args)


class VirtualClock:
    """Deterministic scheduler with a manually advanced clock.

    Callbacks run inside advance() or run_until_idle(), in due-time order,
    with ties broken by scheduling order. Exceptions raised by a callback
    propagate to the caller of advance(). The failed timer is already
    consumed, so the clock stays usable.

    Usage:
        >>> clock = VirtualClock()
        >>> fired = []
        >>> _ = clock.call_later(0.03, fired.append, "tick")
        >>> clock.advance(0.03)
        1
        >>> fired
        ['tick']

    """

    __slots__ = ("_now", "_queue", "_seq")

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: list[tuple[float, int, VirtualTimer]] = []
        self._seq = 0

    def time(self) -> float:
        """Current virtual time in seconds."""
        return self._now

    @property
    def pending(self) -> int:
        """Number of scheduled callbacks that have not run or been cancelled."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled())

    def call_later(
        self, delay: float, callback: Callable[..., object], *args: Any
    ) -> VirtualTimer:
        when = round(self._now + max(delay, 0), _TIME_PRECISION)
        timer = VirtualTimer(when, callback, args)
        heapq.heappush(self._queue, (when, self._seq, timer))
        self._seq += 1
        return timer

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running every callback that falls due.

        Callbacks scheduled while advancing also run if they fall due
        before the new time.

        Returns:
            Number of callbacks run.
        """
        target = round(self._now + seconds, _TIME_PRECISION)
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            when, _, timer = heapq.heappop(self._queue)
            if timer.cancelled():
                continue
            self._now = when
            fired += 1
            timer._run()
        self._now = target
        return fired

    def run_until_idle(self, max_callbacks: int = 100_000) -> int:
        """Run callbacks in order until nothing is scheduled.

        Raises:
            StreamError: If more than ``max_callbacks`` callbacks run, which
                means something keeps rescheduling itself.

        Returns:
            Number of callbacks run.
        """
        fired = 0
        while self._queue:
            if fired >= max_callbacks and self.pending:
                msg = f"VirtualClock still busy after {max_callbacks} callbacks"
                raise StreamError(msg)
            when, _, timer = heapq.heappop(self._queue)
            if timer.cancelled():
                continue
            self._now = max(self._now, when)
            fired += 1
            timer._run()
        return fired
