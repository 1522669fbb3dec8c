"""RSVP Reader — rapid serial visual presentation playback engine.

WHY: Speed reading with RSVP shows one word at a time at a fixed point,
timed to a target rate, so the eye never has to move. Getting that right
needs careful segmentation, fixation-point placement, punctuation-aware
timing, and a playback loop that can pause, seek, and resume without a
stray timer corrupting the position.

HOW: Three layers: core (pure segmentation, fixation, timing), playback
(scheduler abstraction + controller state machine), and sync (a policy
that decides when to hand positions to an external sink). The CLI wires
them together for terminal reading.

RULES:
- The engine owns no storage and no transport; sinks are injected
- Exactly one playback timer is outstanding at any time
- Everything below the CLI is single-threaded and event-loop agnostic
"""

__version__ = "0.1.0"
