"""Word-level dataclasses shared by the segmenter, controller, and renderer.

WHY: The segmenter, timing model, playback controller, and renderer all
need the same view of a word: its text, its position, and how long it
should stay on screen. A single, well-typed set of value objects keeps
those components decoupled.

HOW: Three immutable types:
  WordUnit      — one whitespace-delimited token with punctuation metadata
  WordSequence  — the ordered, 0-indexed tuple of WordUnits for one text
  FixationSplit — a word cut into before / focus letter / after

RULES:
- WordUnit and WordSequence are frozen; a new text means a new sequence
- At most one of is_sentence_end / is_clause_end is True
- delay_multiplier is a pure function of those two flags
- FixationSplit parts always concatenate back to the original word
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Optional, overload


@dataclass(frozen=True)
class WordUnit:
    """A single display token produced by the segmenter.

    RULES:
    - text: the exact token, trailing punctuation included
    - index: position in the owning WordSequence
    - delay_multiplier: 1.5 sentence end, 1.2 clause end, 1.0 otherwise
    """

    text: str
    index: int
    delay_multiplier: float = 1.0
    is_sentence_end: bool = False
    is_clause_end: bool = False


@dataclass(frozen=True)
class WordSequence:
    """Ordered, immutable list of WordUnits for one source text.

    WHY: The controller indexes, measures, and scans the sequence many
    times per second. Wrapping the tuple keeps the source text alongside
    the units and makes "never mutated in place" explicit.
    """

    words: tuple[WordUnit, ...] = ()
    source_text: str = field(default="", compare=False, repr=False)

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self) -> Iterator[WordUnit]:
        return iter(self.words)

    def __bool__(self) -> bool:
        return bool(self.words)

    @overload
    def __getitem__(self, index: int) -> WordUnit: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[WordUnit, ...]: ...

    def __getitem__(self, index):
        return self.words[index]

    def get(self, index: int) -> Optional[WordUnit]:
        """Return the unit at ``index``, or None when out of range."""
        if 0 <= index < len(self.words):
            return self.words[index]
        return None

    @property
    def texts(self) -> list[str]:
        return [w.text for w in self.words]


@dataclass(frozen=True)
class FixationSplit:
    """A word cut around its fixation letter.

    RULES:
    - before + focus_char + after == the original word
    - focus_char is exactly one character, or "" for an empty word
    """

    before: str
    focus_char: str
    after: str

    @property
    def text(self) -> str:
        return self.before + self.focus_char + self.after
