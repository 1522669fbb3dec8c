"""Whitespace segmentation, punctuation classification, and sentence search.

WHY: RSVP shows one token at a time, and each token needs to know how
long to stay up (longer after a full stop or comma) and whether it ends
a sentence (for sentence navigation). This module turns raw text into
that timed sequence.

HOW: The text is trimmed and split on runs of whitespace. Each token's
last character is checked against the sentence-end set first, then the
clause-end set, and a WordUnit is built with the matching multiplier.
Two scan helpers find sentence boundaries relative to a word index.

RULES:
- Any string maps to a WordSequence; empty or blank text → empty sequence
- Zero-length tokens are discarded
- Sentence end: token ends in ".", "!" or "?" → multiplier 1.5
- Clause end: token ends in ",", ";" or ":" → multiplier 1.2
- A token is never both a sentence end and a clause end
"""

from __future__ import annotations

from rsvp_reader.config import (
    CLAUSE_END_CHARS,
    CLAUSE_END_MULTIPLIER,
    DEFAULT_MULTIPLIER,
    SENTENCE_END_CHARS,
    SENTENCE_END_MULTIPLIER,
)
from rsvp_reader.core.words import WordSequence, WordUnit


def _classify(token: str) -> tuple[bool, bool, float]:
    """Return (is_sentence_end, is_clause_end, delay_multiplier) for a token."""
    last = token[-1:]
    if last in SENTENCE_END_CHARS:
        return True, False, SENTENCE_END_MULTIPLIER
    if last in CLAUSE_END_CHARS:
        return False, True, CLAUSE_END_MULTIPLIER
    return False, False, DEFAULT_MULTIPLIER


def segment(text: str) -> WordSequence:
    """Split raw text into an ordered sequence of timed word units.

    Args:
        text: Any string, including empty or whitespace-only text.

    Returns:
        WordSequence with one WordUnit per maximal non-whitespace run.
    """
    # str.split() with no separator trims and drops empty tokens
    tokens = text.split()

    units = []
    for index, token in enumerate(tokens):
        sentence_end, clause_end, multiplier = _classify(token)
        units.append(WordUnit(
            text=token,
            index=index,
            delay_multiplier=multiplier,
            is_sentence_end=sentence_end,
            is_clause_end=clause_end,
        ))

    return WordSequence(words=tuple(units), source_text=text)


def count_words(text: str) -> int:
    """Count whitespace-delimited words without building WordUnits."""
    return len(text.split())


def find_sentence_start(words: WordSequence, current_index: int) -> int:
    """Find the first word of the sentence containing ``current_index``.

    WHY: "Previous sentence" rewinds to the start of the sentence being
    read. Repeated calls from a sentence's first word stay put; this is
    a single-level rewind, not sentence-by-sentence paging.

    HOW: Scan backwards, strictly before ``current_index``, for the
    nearest sentence end. The word after it starts the sentence.

    RULES:
    - Returns found_index + 1, or 0 when no earlier sentence end exists
    """
    for i in range(min(current_index, len(words)) - 1, -1, -1):
        if words[i].is_sentence_end:
            return i + 1
    return 0


def find_next_sentence_start(words: WordSequence, current_index: int) -> int:
    """Find the first word of the sentence after ``current_index``.

    HOW: Scan forwards from ``current_index`` (inclusive) for the nearest
    sentence end and step one past it.

    RULES:
    - Result is clamped to the last word (len - 1)
    - No sentence end ahead → the last word
    - Empty sequence → 0
    """
    last = len(words) - 1
    if last < 0:
        return 0
    for i in range(max(current_index, 0), len(words)):
        if words[i].is_sentence_end:
            return min(i + 1, last)
    return last
