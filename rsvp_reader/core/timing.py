"""Per-word display timing and stepped rate control.

WHY: A words-per-minute rate has to become a concrete delay for every
word, stretched after punctuation so sentences and clauses get a short
breather. The stepped rate control (up/down by 50) also lives here so
the bounds are enforced in exactly one place.

HOW: base delay = 60 000 / wpm milliseconds, multiplied by the word's
delay multiplier. Stepped changes add or subtract WPM_STEP and clamp to
[MIN_WPM, MAX_WPM].

RULES:
- rate_wpm <= 0 raises InvalidRateError; there is no silent fallback
- No upper bound on the resulting delay
- Clamping happens at the stepped-control boundary, never in word_delay_ms
"""

from __future__ import annotations

from rsvp_reader.config import MAX_WPM, MIN_WPM, WPM_STEP
from rsvp_reader.core.words import WordSequence


class InvalidRateError(ValueError):
    """Raised when a reading rate is zero or negative.

    WHY: A non-positive rate would divide by zero or yield a negative
    delay. That is a caller bug, so it surfaces as an exception.
    """

    def __init__(self, rate_wpm: float) -> None:
        self.rate_wpm = rate_wpm
        super().__init__("Reading rate must be positive, got {}".format(rate_wpm))


def word_delay_ms(rate_wpm: float, delay_multiplier: float = 1.0) -> float:
    """Return how long a word stays on screen, in milliseconds.

    Args:
        rate_wpm: Words per minute; must be positive.
        delay_multiplier: Punctuation multiplier from the WordUnit.

    Returns:
        (60 / rate_wpm) * 1000 * delay_multiplier.
    """
    if rate_wpm <= 0:
        raise InvalidRateError(rate_wpm)
    base_delay_ms = (60 / rate_wpm) * 1000
    return base_delay_ms * delay_multiplier


def clamp_stepped_rate(rate_wpm: float) -> int:
    """Clamp a rate into the stepped control's [MIN_WPM, MAX_WPM] range."""
    return int(max(MIN_WPM, min(MAX_WPM, rate_wpm)))


def step_rate(rate_wpm: float, steps: int) -> int:
    """Move a rate by ``steps`` increments of WPM_STEP and clamp it.

    RULES:
    - Positive steps speed up, negative steps slow down
    - The result is always inside [MIN_WPM, MAX_WPM], so the stepped
      control never produces a non-positive rate
    """
    return clamp_stepped_rate(rate_wpm + steps * WPM_STEP)


def estimate_remaining_ms(words: WordSequence, start_index: int, rate_wpm: float) -> float:
    """Total display time for the words from ``start_index`` to the end."""
    if rate_wpm <= 0:
        raise InvalidRateError(rate_wpm)
    return sum(
        word_delay_ms(rate_wpm, w.delay_multiplier)
        for w in words[max(start_index, 0):]
    )
