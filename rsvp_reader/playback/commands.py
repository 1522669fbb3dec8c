"""Key and command bindings for the playback controls.

WHY: The same six controls (play/pause, previous/next sentence, faster,
slower, restart) are reachable from keyboard keys and from typed line
commands in the interactive CLI. One table keeps those front-ends in
agreement.

HOW: COMMANDS maps a command name to the controller method it calls.
KEY_BINDINGS and LINE_COMMANDS map user input to command names.
dispatch() looks the input up and invokes the action.

RULES:
- Space toggles play/pause; left/right are sentence jumps;
  up/down step the rate; "r" restarts
- Unknown input returns None and leaves the controller untouched
- Lookups are case-insensitive for letter keys
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Dict, Optional

from rsvp_reader.playback.controller import PlaybackController

COMMANDS: Dict[str, Callable[[PlaybackController], None]] = {
    "toggle": PlaybackController.toggle_play_pause,
    "previous_sentence": PlaybackController.go_to_previous_sentence,
    "next_sentence": PlaybackController.go_to_next_sentence,
    "faster": PlaybackController.increase_rate,
    "slower": PlaybackController.decrease_rate,
    "restart": PlaybackController.restart,
}

KEY_BINDINGS: Dict[str, str] = {
    " ": "toggle",
    "space": "toggle",
    "left": "previous_sentence",
    "right": "next_sentence",
    "up": "faster",
    "down": "slower",
    "r": "restart",
}

LINE_COMMANDS: Dict[str, str] = {
    "": "toggle",
    "p": "toggle",
    "<": "previous_sentence",
    ">": "next_sentence",
    "+": "faster",
    "-": "slower",
    "r": "restart",
}


def resolve(user_input: str, table: Dict[str, str]) -> Optional[str]:
    """Map raw input to a command name using ``table``, or None."""
    if user_input in table:
        return table[user_input]
    return table.get(user_input.strip().lower())


def dispatch(
    controller: PlaybackController,
    user_input: str,
    table: Dict[str, str] = KEY_BINDINGS,
) -> Optional[str]:
    """Run the command bound to ``user_input`` on ``controller``.

    Returns:
        The command name that ran, or None if the input is unbound.
    """
    name = resolve(user_input, table)
    if name is None:
        return None
    COMMANDS[name](controller)
    return name
