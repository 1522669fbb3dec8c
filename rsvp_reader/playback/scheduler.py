"""One-shot timer scheduling behind a narrow, cancelable interface.

WHY: The playback loop is driven by exactly one outstanding timer. Hiding
that timer behind ``schedule_after(delay_ms, fn) -> CancelToken`` lets
the controller run on an asyncio event loop in the CLI and on a virtual
clock in tests, with identical semantics.

HOW: Two implementations of the Scheduler ABC:
  AsyncioScheduler — wraps loop.call_later(); the token wraps the TimerHandle
  ManualScheduler  — keeps a virtual clock and a list of pending
                     callbacks; advance(ms) fires whatever falls due

RULES:
- A cancelled callback never runs, even if its due time has passed
- cancel() is idempotent and safe after the callback has fired
- Callbacks due at the same time fire in scheduling order
- Negative delays are treated as 0
"""

from __future__ import annotations

import asyncio
import itertools
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import List, Optional


class CancelToken(ABC):
    """Handle for one scheduled callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Discard the callback if it has not fired yet."""

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        """True once cancel() has been called."""


class Scheduler(ABC):
    """Abstract one-shot timer source used by the playback controller."""

    @abstractmethod
    def schedule_after(self, delay_ms: float, callback: Callable[[], None]) -> CancelToken:
        """Run ``callback`` once, ``delay_ms`` milliseconds from now.

        Returns:
            A CancelToken that discards the callback when cancelled.
        """


# ---------------------------------------------------------------------------
# asyncio
# ---------------------------------------------------------------------------


class _TimerHandleToken(CancelToken):
    def __init__(self, handle: asyncio.TimerHandle) -> None:
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()


class AsyncioScheduler(Scheduler):
    """Scheduler backed by an asyncio event loop.

    RULES:
    - loop defaults to the running loop at first use
    - Must be used from the loop's thread (call_later is not thread-safe)
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule_after(self, delay_ms: float, callback: Callable[[], None]) -> CancelToken:
        handle = self._get_loop().call_later(max(delay_ms, 0) / 1000.0, callback)
        return _TimerHandleToken(handle)


# ---------------------------------------------------------------------------
# Virtual clock
# ---------------------------------------------------------------------------


class _ManualTimer(CancelToken):
    def __init__(self, due_ms: float, seq: int, callback: Callable[[], None]) -> None:
        self.due_ms = due_ms
        self.seq = seq
        self.callback = callback
        self.fired = False
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """Deterministic scheduler driven by an explicit virtual clock.

    WHY: Playback timing is the whole point of the controller; testing it
    against wall-clock sleeps would be slow and flaky. A virtual clock
    makes "after 200 ms the next word shows" an exact assertion.

    HOW: schedule_after() records (due time, sequence number, callback).
    advance(ms) moves the clock forward, firing due callbacks one at a
    time in (due, seq) order. Callbacks may schedule further callbacks;
    those fire in the same advance() call if they fall due within it.
    """

    def __init__(self) -> None:
        self.now_ms: float = 0.0
        self._timers: List[_ManualTimer] = []
        self._seq = itertools.count()

    def schedule_after(self, delay_ms: float, callback: Callable[[], None]) -> CancelToken:
        timer = _ManualTimer(self.now_ms + max(delay_ms, 0), next(self._seq), callback)
        self._timers.append(timer)
        return timer

    @property
    def pending(self) -> int:
        """Number of callbacks scheduled but neither fired nor cancelled."""
        return sum(1 for t in self._timers if not t.cancelled and not t.fired)

    def next_due_ms(self) -> Optional[float]:
        """Virtual time of the next live callback, or None when idle."""
        live = [t for t in self._timers if not t.cancelled and not t.fired]
        if not live:
            return None
        return min(t.due_ms for t in live)

    def advance(self, delay_ms: float) -> int:
        """Move the clock forward by ``delay_ms`` and fire what falls due.

        Returns:
            The number of callbacks fired.
        """
        target = self.now_ms + delay_ms
        fired = 0
        while True:
            due = [
                t for t in self._timers
                if not t.cancelled and not t.fired and t.due_ms <= target
            ]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due_ms, t.seq))
            self.now_ms = timer.due_ms
            timer.fired = True
            timer.callback()
            fired += 1
        self.now_ms = target
        self._timers = [t for t in self._timers if not t.cancelled and not t.fired]
        return fired

    def run_until_idle(self, limit: int = 100_000) -> int:
        """Fire callbacks until none remain, or ``limit`` have fired."""
        fired = 0
        while fired < limit:
            due = self.next_due_ms()
            if due is None:
                break
            fired += self.advance(due - self.now_ms)
        return fired
