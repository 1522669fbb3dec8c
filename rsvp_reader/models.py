"""Pydantic models for reader settings and the initial playback state.

WHY: Resume positions and rates arrive from outside the engine (a
database row, a settings file, CLI flags). Validating them once at this
boundary means the controller can trust what it receives, in particular
that the rate is positive, so the timing model never sees zero.

HOW: Two BaseModel classes with Field constraints. InitialState builds a
PlaybackController directly via build_controller().

RULES:
- All models use Field(description=...) for self-documenting schemas
- resume_position >= 0; positions past the end are clamped by the controller
- Rates must be > 0; the [100, 600] stepped range is NOT enforced here
- Defaults: position 0, rate DEFAULT_WPM (300), auto-save every 5 words
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from rsvp_reader.config import AUTO_SAVE_EVERY, DEFAULT_WPM
from rsvp_reader.playback.controller import PlaybackController
from rsvp_reader.playback.scheduler import Scheduler


class ReaderSettings(BaseModel):
    """Per-reader preferences that affect playback and sync.

    RULES:
    - default_wpm seeds new readings that have no saved rate
    - auto_save_every is the sync policy's count threshold
    """

    default_wpm: int = Field(
        default=DEFAULT_WPM,
        gt=0,
        description="Reading rate for new readings, in words per minute.",
    )
    auto_save_every: int = Field(
        default=AUTO_SAVE_EVERY,
        ge=1,
        description="Number of word advances between automatic position saves.",
    )


class InitialState(BaseModel):
    """Seed for a new controller: the text plus where and how fast to resume.

    WHY: A reading reopened later should continue at the saved word and
    rate. Absent values fall back to the start of the text at 300 wpm.
    """

    text: str = Field(default="", description="Full source text of the reading.")
    resume_position: int = Field(
        default=0,
        ge=0,
        description="Word index to resume from.",
    )
    resume_rate_wpm: int = Field(
        default=DEFAULT_WPM,
        gt=0,
        description="Reading rate to resume with, in words per minute.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "text": "Hello world. Next sentence!",
                "resume_position": 2,
                "resume_rate_wpm": 350,
            }
        ]
    }}

    def build_controller(self, scheduler: Scheduler) -> PlaybackController:
        return PlaybackController(
            scheduler,
            text=self.text,
            resume_position=self.resume_position,
            rate_wpm=self.resume_rate_wpm,
        )
