"""
Timer scheduling for the WheelSpin engine.

The engine never sleeps. Every phase transition and feedback pulse is a
callback registered with a scheduler, so the caller's thread is never
blocked and tests can drive a spin without waiting on the wall clock.

Classes:
    ScheduledCall: Handle for a pending callback
    Scheduler: Abstract scheduler interface
    ManualScheduler: Deterministic fake clock advanced by hand
    AsyncioScheduler: Scheduler backed by an asyncio event loop
"""

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Tuple


class ScheduledCall:
    """
    Handle returned by :meth:`Scheduler.call_later`.

    Attributes:
        due: Scheduler time at which the callback fires
        callback: Zero-argument callable to run
    """

    def __init__(self, due: float, callback: Callable[[], Any], handle: Optional[Any] = None):
        self.due = due
        self.callback = callback
        self._handle = handle
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "pending"
        return f"<ScheduledCall due={self.due:.3f} {state}>"


class Scheduler(ABC):
    """Source of time and delayed callbacks for the spin engine."""

    @abstractmethod
    def now(self) -> float:
        """Current scheduler time in seconds."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], Any]) -> ScheduledCall:
        """
        Run ``callback`` after ``delay`` seconds.

        Raises:
            ValueError: If ``delay`` is negative
        """


class ManualScheduler(Scheduler):
    """
    Fake clock whose time only moves when :meth:`advance` is called.

    Callbacks run in due-time order; callbacks due at the same instant run
    in the order they were scheduled. A callback scheduled while the clock
    is advancing runs in the same call when it falls due before the target
    time.

    Example:
        >>> scheduler = ManualScheduler()
        >>> fired = []
        >>> _ = scheduler.call_later(0.5, lambda: fired.append(scheduler.now()))
        >>> scheduler.advance(1.0)
        1
        >>> fired
        [0.5]
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._queue: List[Tuple[float, int, ScheduledCall]] = []
        self._sequence = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], Any]) -> ScheduledCall:
        if delay < 0:
            raise ValueError(f"Delay must not be negative, got {delay}")

        call = ScheduledCall(self._now + delay, callback)
        heapq.heappush(self._queue, (call.due, next(self._sequence), call))
        return call

    @property
    def pending(self) -> int:
        """Number of callbacks that are scheduled and not cancelled."""
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward and run every callback that falls due.

        Args:
            seconds: Non-negative amount of time to advance

        Returns:
            Number of callbacks that ran

        Raises:
            ValueError: If ``seconds`` is negative
        """
        if seconds < 0:
            raise ValueError(f"Cannot move the clock backwards by {seconds}")

        target = self._now + seconds
        ran = 0

        while self._queue and self._queue[0][0] <= target:
            due, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self._now = max(self._now, due)
            call.callback()
            ran += 1

        self._now = target
        return ran

    def run_until_idle(self, limit: int = 10000) -> int:
        """
        Run every pending callback, jumping the clock as needed.

        Args:
            limit: Safety cap on the number of callbacks to run

        Returns:
            Number of callbacks that ran

        Raises:
            RuntimeError: If callbacks keep rescheduling past ``limit``
        """
        ran = 0
        while self._queue:
            due, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            if ran >= limit:
                raise RuntimeError(f"Scheduler still busy after {limit} callbacks")
            self._now = max(self._now, due)
            call.callback()
            ran += 1
        return ran


class AsyncioScheduler(Scheduler):
    """
    Scheduler running callbacks on an asyncio event loop.

    All callbacks run on the loop's thread, one at a time, which gives the
    engine the single logical thread of control it expects.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        return self.loop.time()

    def call_later(self, delay: float, callback: Callable[[], Any]) -> ScheduledCall:
        if delay < 0:
            raise ValueError(f"Delay must not be negative, got {delay}")

        handle = self.loop.call_later(delay, callback)
        return ScheduledCall(self.loop.time() + delay, callback, handle=handle)
