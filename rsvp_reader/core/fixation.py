"""Optimal recognition point (fixation letter) calculation.

WHY: RSVP keeps the eye still by drawing every word so that one letter,
slightly left of centre, always lands on the same screen column. Which
letter that is depends only on word length.

HOW: A fixed length-band table maps word length to a 0-based offset.
split_word() cuts the word around that offset for the renderer.

RULES:
- Length 1 → 0, 2–5 → 1, 6–9 → 2, 10–13 → 3, 14+ → 4
- Length 0 → 0, and split_word("") → ("", "", "") without raising
- The offset is monotonic in length and never exceeds 4
"""

from __future__ import annotations

from rsvp_reader.core.words import FixationSplit

# (max_length, index) bands, checked in order; longer words fall through to 4.
_BANDS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (5, 1),
    (9, 2),
    (13, 3),
)
_LONG_WORD_INDEX = 4


def fixation_index(word: str) -> int:
    """Return the 0-based offset of the letter to fixate in ``word``."""
    length = len(word)
    for max_length, index in _BANDS:
        if length <= max_length:
            return index
    return _LONG_WORD_INDEX


def split_word(word: str) -> FixationSplit:
    """Cut ``word`` into before / focus letter / after around its fixation point."""
    if not word:
        return FixationSplit(before="", focus_char="", after="")
    idx = fixation_index(word)
    return FixationSplit(
        before=word[:idx],
        focus_char=word[idx],
        after=word[idx + 1:],
    )
