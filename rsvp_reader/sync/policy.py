"""Position sync policy: decides when to push the reading position.

WHY: Saving on every word would hammer the sink; saving only on exit
would lose progress on a crash. Two independent triggers cover both:
a count-based throttle for steady progress, and an unconditional flush
when playback stops so the exact stop position is never lost.

HOW: observe() counts (index, rate) observations and saves every
``every_n_words``. flush() saves immediately, resets the counter, and
cancels any pending debounced save. debounced_save() coalesces bursts
(e.g. repeated rate steps while paused) into one save after
``debounce_ms``. attach() wires the policy to a controller: each
RenderFrame is compared with the previous one to decide which trigger
applies.

RULES:
- Count trigger: save on the Nth observation, then reset the counter to 0
- Pause edge (playing → not playing, including reaching the end): flush
- Rate change while paused: debounced save, last write wins; counted as
  an observation when the policy has no scheduler
- Exactly one sink call per trigger; no retry on failure
- Sink exceptions are logged and swallowed; awaitable results are
  scheduled on the running loop and never awaited
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any, Optional, Set

from rsvp_reader.config import AUTO_SAVE_EVERY, SYNC_DEBOUNCE_MS
from rsvp_reader.playback.controller import PlaybackController
from rsvp_reader.playback.scheduler import CancelToken, Scheduler
from rsvp_reader.playback.state import RenderFrame
from rsvp_reader.sync.sinks import PositionSink

logger = logging.getLogger(__name__)


class PositionSyncPolicy:
    """Count- and pause-triggered forwarding of positions to a sink.

    Args:
        sink: Destination for saves.
        reading_id: Identifier passed through to the sink.
        every_n_words: Observations between count-triggered saves (>= 1).
        scheduler: Timer source for debounced saves. Without one,
                   attached rate changes while paused are counted
                   instead and debounced_save() raises RuntimeError.
        debounce_ms: Delay for debounced saves.
    """

    def __init__(
        self,
        sink: PositionSink,
        reading_id: str,
        every_n_words: int = AUTO_SAVE_EVERY,
        scheduler: Optional[Scheduler] = None,
        debounce_ms: float = SYNC_DEBOUNCE_MS,
    ) -> None:
        if every_n_words < 1:
            raise ValueError("every_n_words must be >= 1, got {}".format(every_n_words))
        self._sink = sink
        self.reading_id = reading_id
        self.every_n_words = every_n_words
        self._scheduler = scheduler
        self._debounce_ms = debounce_ms
        self._counter = 0
        self._debounce: Optional[CancelToken] = None
        self._last_frame: Optional[RenderFrame] = None
        self._tasks: Set[asyncio.Task] = set()
        self.saves = 0

    @property
    def counter(self) -> int:
        return self._counter

    @property
    def has_pending_debounce(self) -> bool:
        return self._debounce is not None and not self._debounce.cancelled

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    def observe(self, index: int, rate_wpm: int) -> bool:
        """Count one observation; save when the threshold is reached.

        Returns:
            True if this observation triggered a save.
        """
        self._counter += 1
        if self._counter >= self.every_n_words:
            self._counter = 0
            self._invoke(index, rate_wpm)
            return True
        return False

    def flush(self, index: int, rate_wpm: int) -> None:
        """Save immediately, reset the counter, and drop any debounced save."""
        self.cancel_debounce()
        self._counter = 0
        self._invoke(index, rate_wpm)

    def debounced_save(self, index: int, rate_wpm: int) -> None:
        """Save after ``debounce_ms`` unless superseded or flushed first."""
        if self._scheduler is None:
            raise RuntimeError("debounced_save requires a scheduler")
        self.cancel_debounce()

        def _fire() -> None:
            self._debounce = None
            self._invoke(index, rate_wpm)

        self._debounce = self._scheduler.schedule_after(self._debounce_ms, _fire)

    def cancel_debounce(self) -> None:
        if self._debounce is not None:
            self._debounce.cancel()
            self._debounce = None

    # ------------------------------------------------------------------
    # Controller wiring
    # ------------------------------------------------------------------

    def attach(self, controller: PlaybackController) -> Callable[[], None]:
        """Start deriving triggers from ``controller``'s frames.

        Returns:
            A callable that detaches the policy again.
        """
        self._last_frame = controller.frame()
        return controller.subscribe(self.on_frame)

    def on_frame(self, frame: RenderFrame) -> None:
        """Classify a controller change and fire the matching trigger."""
        previous = self._last_frame
        self._last_frame = frame
        if previous is None:
            return

        if previous.is_playing and not frame.is_playing:
            self.flush(frame.current_index, frame.rate_wpm)
            return

        moved = frame.current_index != previous.current_index
        rate_changed = frame.rate_wpm != previous.rate_wpm
        paused_rate_change = rate_changed and not moved and not frame.is_playing
        if paused_rate_change and self._scheduler is not None:
            self.debounced_save(frame.current_index, frame.rate_wpm)
        elif moved or rate_changed:
            self.observe(frame.current_index, frame.rate_wpm)

    # ------------------------------------------------------------------
    # Sink call path
    # ------------------------------------------------------------------

    def _invoke(self, index: int, rate_wpm: int) -> None:
        self.saves += 1
        logger.debug("Syncing %s: position %d, %d wpm", self.reading_id, index, rate_wpm)
        try:
            result = self._sink.save(self.reading_id, index, rate_wpm)
        except Exception:
            logger.exception("Position sink failed for %s", self.reading_id)
            return
        if inspect.isawaitable(result):
            self._spawn(result)

    def _spawn(self, awaitable: Any) -> None:
        """Run an async sink result in the background without awaiting it."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; dropping async save for %s", self.reading_id)
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            return
        task = asyncio.ensure_future(awaitable, loop=loop)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Position sink failed for %s", self.reading_id,
                exc_info=(type(exc), exc, exc.__traceback__),
            )
