"""Playback state, status enum, and the render frame snapshot.

WHY: The controller owns one mutable PlaybackState per active reading.
Collaborators (renderer, sync policy) must never mutate it, so they
receive an immutable RenderFrame snapshot instead of the live object.

HOW: PlaybackStatus is derived from the state, never stored, so it can
not drift from current_index / is_playing. RenderFrame bundles what a
render sink needs to paint one word.

RULES:
- 0 <= current_index <= total words; == total only when FINISHED
- is_playing implies current_index < total words
- IDLE: empty sequence; FINISHED: cursor past the last word
- progress_percent is 0 for an empty sequence
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from rsvp_reader.config import DEFAULT_WPM
from rsvp_reader.core.words import FixationSplit


class PlaybackStatus(str, enum.Enum):
    """Externally visible controller states.

    HOW: Inherits from str so values serialize cleanly (logs, JSON).
    """

    IDLE = "idle"
    PAUSED = "paused"
    PLAYING = "playing"
    FINISHED = "finished"


@dataclass
class PlaybackState:
    """Mutable cursor, play flag, and rate for one reading.

    Owned and mutated by PlaybackController only.
    """

    current_index: int = 0
    is_playing: bool = False
    rate_wpm: int = DEFAULT_WPM

    def status(self, total_words: int) -> PlaybackStatus:
        if total_words == 0:
            return PlaybackStatus.IDLE
        if self.current_index >= total_words:
            return PlaybackStatus.FINISHED
        if self.is_playing:
            return PlaybackStatus.PLAYING
        return PlaybackStatus.PAUSED


@dataclass(frozen=True)
class RenderFrame:
    """Everything a render sink needs to paint the current word.

    RULES:
    - display_word is "" when IDLE or FINISHED
    - split always matches display_word
    """

    display_word: str
    current_index: int
    total_words: int
    is_playing: bool
    rate_wpm: int
    status: PlaybackStatus
    split: FixationSplit

    @property
    def progress_percent(self) -> int:
        if self.total_words <= 0:
            return 0
        return round(self.current_index / self.total_words * 100)
