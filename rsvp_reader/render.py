"""Terminal rendering of RenderFrames.

WHY: RSVP only works if the focus letter of every word lands on the same
screen column. In a terminal that means left-padding each word by the
length of its "before" part, so the focus letter is always at
``focus_column``.

HOW: format_word() pads and optionally colours the focus letter with an
ANSI escape. format_status() produces the "Word n of N" progress line.
format_frame() combines both into one carriage-return-prefixed line so
the CLI can overwrite it in place.

RULES:
- The focus letter always starts at ``focus_column`` (0-based)
- Words whose "before" part is longer than focus_column are not truncated
- Colour is red bold (the classic RSVP focus colour) unless disabled
- IDLE renders an empty word; FINISHED shows "Word N of N"
"""

from __future__ import annotations

from rsvp_reader.playback.state import PlaybackStatus, RenderFrame

_FOCUS_COLOR = "\033[1;31m"
_RESET = "\033[0m"
_CLEAR_LINE = "\r\033[K"

DEFAULT_FOCUS_COLUMN = 12


def format_word(frame: RenderFrame, focus_column: int = DEFAULT_FOCUS_COLUMN, color: bool = True) -> str:
    """Return the current word padded so its focus letter sits at ``focus_column``."""
    split = frame.split
    padding = " " * max(focus_column - len(split.before), 0)
    focus = split.focus_char
    if color and focus:
        focus = "{}{}{}".format(_FOCUS_COLOR, focus, _RESET)
    return "{}{}{}{}".format(padding, split.before, focus, split.after)


def format_status(frame: RenderFrame) -> str:
    """Return the progress line, e.g. ``Word 3 of 10 (20%) · 300 wpm · playing``."""
    if frame.status == PlaybackStatus.IDLE:
        return "No text loaded"
    shown = min(frame.current_index + 1, frame.total_words)
    return "Word {} of {} ({}%) · {} wpm · {}".format(
        shown,
        frame.total_words,
        frame.progress_percent,
        frame.rate_wpm,
        frame.status.value,
    )


def format_frame(
    frame: RenderFrame,
    focus_column: int = DEFAULT_FOCUS_COLUMN,
    color: bool = True,
    width: int = 40,
) -> str:
    """Render a frame as one overwritable terminal line."""
    word = format_word(frame, focus_column, color)
    split = frame.split
    visible = max(focus_column, len(split.before)) + len(split.focus_char) + len(split.after)
    gap = " " * max(width - visible, 2)
    prefix = _CLEAR_LINE if color else "\r"
    return "{}{}{}{}".format(prefix, word, gap, format_status(frame))
