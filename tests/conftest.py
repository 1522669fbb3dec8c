"""Shared test fixtures for the rsvp_reader test suite.

WHY: Controller, sync, and CLI tests all need the same small texts, a
deterministic scheduler, and a sink that records what it was asked to
save. Centralizing them keeps the scenarios identical across modules.

HOW: Pytest fixtures provide sample texts, a fresh ManualScheduler, a
controller factory bound to that scheduler, and a recording sink.

RULES:
- Every test gets its own ManualScheduler (virtual clock starts at 0)
- SENTENCE_TEXT is the four-word navigation scenario
- Timing assertions rely on DEFAULT rate 300 wpm → 200 ms per plain word
"""

from typing import List, Tuple

import pytest

from rsvp_reader.playback.controller import PlaybackController
from rsvp_reader.playback.scheduler import ManualScheduler
from rsvp_reader.sync.sinks import CallbackPositionSink


SENTENCE_TEXT = "Hello world. Next sentence!"


class RecordingSink(CallbackPositionSink):
    """Sink that remembers every save as (reading_id, position, rate)."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, int, int]] = []
        super().__init__(lambda rid, pos, rate: self.calls.append((rid, pos, rate)))


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def make_controller(scheduler):
    """Factory building a controller on the shared ManualScheduler."""

    def _make(text=SENTENCE_TEXT, resume_position=0, rate_wpm=300):
        return PlaybackController(
            scheduler,
            text=text,
            resume_position=resume_position,
            rate_wpm=rate_wpm,
        )

    return _make


@pytest.fixture
def sink():
    return RecordingSink()
