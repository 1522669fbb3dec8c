"""Playback controller: the RSVP state machine over a word sequence.

WHY: Everything time-sensitive about RSVP lives here: play/pause,
advancing on a timer, sentence-relative seeking, mid-flight rate changes,
restart, and the end of the text. Keeping it in one class with one
outstanding timer makes the invariants checkable.

HOW: The controller owns a WordSequence, a PlaybackState, and at most
one CancelToken from its Scheduler. play() schedules a tick for the
current word; each tick advances the cursor and schedules the next tick
using the delay of the word now on screen. Every seek cancels the
pending tick first, so a stale tick can never move the cursor after a
manual jump. After any change a RenderFrame is pushed to subscribers.

RULES:
- At most one tick is outstanding; scheduling always cancels the previous one
- pause/restart/set_index/sentence jumps cancel the pending tick first
- Reaching the end forces is_playing = False (FINISHED)
- set_rate never re-times the tick already in flight
- Operations on an empty sequence are no-ops, never errors
- Seek targets are clamped, never rejected
- Listener exceptions are logged and do not interrupt playback
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import List, Optional

from rsvp_reader.config import DEFAULT_WPM
from rsvp_reader.core.fixation import split_word
from rsvp_reader.core.segmenter import (
    find_next_sentence_start,
    find_sentence_start,
    segment,
)
from rsvp_reader.core.timing import InvalidRateError, step_rate, word_delay_ms
from rsvp_reader.core.words import WordSequence, WordUnit
from rsvp_reader.playback.scheduler import CancelToken, Scheduler
from rsvp_reader.playback.state import PlaybackState, PlaybackStatus, RenderFrame

logger = logging.getLogger(__name__)

FrameListener = Callable[[RenderFrame], None]


class PlaybackController:
    """Cooperative, cancelable, resumable RSVP playback loop.

    Args:
        scheduler: Timer source; the controller keeps at most one
                   callback scheduled on it at a time.
        text: Source text to segment. Empty text leaves the controller IDLE.
        resume_position: Word index to start from, clamped to [0, len].
        rate_wpm: Initial reading rate; any positive value is accepted.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        text: str = "",
        resume_position: int = 0,
        rate_wpm: int = DEFAULT_WPM,
    ) -> None:
        if rate_wpm <= 0:
            raise InvalidRateError(rate_wpm)
        self._scheduler = scheduler
        self._words = segment(text)
        self._state = PlaybackState(
            current_index=self._clamp_resume(resume_position),
            rate_wpm=rate_wpm,
        )
        self._pending: Optional[CancelToken] = None
        self._listeners: List[FrameListener] = []

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def words(self) -> WordSequence:
        return self._words

    @property
    def total_words(self) -> int:
        return len(self._words)

    @property
    def current_index(self) -> int:
        return self._state.current_index

    @property
    def is_playing(self) -> bool:
        return self._state.is_playing

    @property
    def rate_wpm(self) -> int:
        return self._state.rate_wpm

    @property
    def status(self) -> PlaybackStatus:
        return self._state.status(len(self._words))

    @property
    def current_word(self) -> Optional[WordUnit]:
        return self._words.get(self._state.current_index)

    @property
    def has_pending_tick(self) -> bool:
        return self._pending is not None and not self._pending.cancelled

    def frame(self) -> RenderFrame:
        """Snapshot of what should be on screen right now."""
        word = self.current_word
        text = word.text if word is not None else ""
        return RenderFrame(
            display_word=text,
            current_index=self._state.current_index,
            total_words=len(self._words),
            is_playing=self._state.is_playing,
            rate_wpm=self._state.rate_wpm,
            status=self.status,
            split=split_word(text),
        )

    # ------------------------------------------------------------------
    # Render sink subscription
    # ------------------------------------------------------------------

    def subscribe(self, listener: FrameListener) -> Callable[[], None]:
        """Register a listener called with a RenderFrame after every change.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _emit(self) -> None:
        frame = self.frame()
        for listener in list(self._listeners):
            try:
                listener(frame)
            except Exception:
                logger.exception("Frame listener %r failed", listener)

    def _snapshot(self) -> tuple[int, bool, int]:
        return (self._state.current_index, self._state.is_playing, self._state.rate_wpm)

    def _emit_if_changed(self, before: tuple[int, bool, int]) -> None:
        if self._snapshot() != before:
            self._emit()

    # ------------------------------------------------------------------
    # Timer handling
    # ------------------------------------------------------------------

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _schedule_tick(self) -> None:
        """Schedule the tick that ends the current word's display time."""
        self._cancel_pending()
        word = self._words[self._state.current_index]
        delay = word_delay_ms(self._state.rate_wpm, word.delay_multiplier)
        self._pending = self._scheduler.schedule_after(delay, self._tick)

    def _tick(self) -> None:
        """Advance to the next word; fired only by the outstanding timer."""
        self._pending = None
        if not self._state.is_playing:
            return

        self._state.current_index += 1
        if self._state.current_index >= len(self._words):
            self._state.current_index = len(self._words)
            self._state.is_playing = False
            logger.debug("Playback finished after %d words", len(self._words))
        else:
            self._schedule_tick()
        self._emit()

    def _halt(self) -> None:
        """Cancel the pending tick and clear the play flag without emitting."""
        self._cancel_pending()
        self._state.is_playing = False

    # ------------------------------------------------------------------
    # Play / pause
    # ------------------------------------------------------------------

    def play(self) -> None:
        """Start advancing from the current word.

        RULES:
        - No-op when IDLE, FINISHED, or already PLAYING
        """
        if not self._words or self._state.current_index >= len(self._words):
            return
        if self._state.is_playing:
            return
        self._state.is_playing = True
        self._schedule_tick()
        logger.debug("Play from %d at %d wpm", self._state.current_index, self._state.rate_wpm)
        self._emit()

    def pause(self) -> None:
        """Stop advancing; idempotent."""
        before = self._snapshot()
        self._halt()
        self._emit_if_changed(before)

    def toggle_play_pause(self) -> None:
        if self._state.is_playing:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Seeking
    # ------------------------------------------------------------------

    def restart(self) -> None:
        """Pause and rewind to the first word."""
        before = self._snapshot()
        self._halt()
        self._state.current_index = 0
        self._emit_if_changed(before)

    def set_index(self, index: int) -> None:
        """Pause and jump to ``index``, clamped to [0, len - 1]."""
        before = self._snapshot()
        self._halt()
        if self._words:
            self._state.current_index = max(0, min(index, len(self._words) - 1))
        self._emit_if_changed(before)

    def go_to_previous_sentence(self) -> None:
        """Pause and rewind to the start of the current sentence.

        RULES:
        - Single-level: from a sentence's first word this stays put
        - From FINISHED, the cursor is treated as sitting on the last word
        """
        before = self._snapshot()
        self._halt()
        if self._words:
            anchor = min(self._state.current_index, len(self._words) - 1)
            self._state.current_index = find_sentence_start(self._words, anchor)
        self._emit_if_changed(before)

    def go_to_next_sentence(self) -> None:
        """Pause and jump to the first word of the next sentence."""
        before = self._snapshot()
        self._halt()
        if self._words:
            self._state.current_index = find_next_sentence_start(
                self._words, self._state.current_index
            )
        self._emit_if_changed(before)

    # ------------------------------------------------------------------
    # Rate
    # ------------------------------------------------------------------

    def set_rate(self, rate_wpm: int) -> None:
        """Change the reading rate without touching the play state.

        The tick already in flight keeps the delay it was scheduled with;
        the new rate applies from the next word.
        """
        if rate_wpm <= 0:
            raise InvalidRateError(rate_wpm)
        if rate_wpm == self._state.rate_wpm:
            return
        self._state.rate_wpm = rate_wpm
        self._emit()

    def increase_rate(self) -> None:
        """Stepped control: +50 wpm, capped at MAX_WPM."""
        self.set_rate(step_rate(self._state.rate_wpm, 1))

    def decrease_rate(self) -> None:
        """Stepped control: -50 wpm, floored at MIN_WPM."""
        self.set_rate(step_rate(self._state.rate_wpm, -1))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _clamp_resume(self, position: int) -> int:
        return max(0, min(position, len(self._words)))

    def load_text(self, text: str, resume_position: int = 0) -> None:
        """Pause, replace the word sequence, and seat the cursor."""
        self._halt()
        self._words = segment(text)
        self._state.current_index = self._clamp_resume(resume_position)
        logger.debug("Loaded %d words, resuming at %d", len(self._words), self._state.current_index)
        self._emit()

    def close(self) -> None:
        """Pause and drop all listeners; the controller can be discarded."""
        self.pause()
        self._listeners.clear()
