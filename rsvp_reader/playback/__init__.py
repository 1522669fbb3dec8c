"""Playback layer: scheduler abstraction, state, controller, and bindings.

WHY: This package holds the only stateful, time-driven part of the
reader. It consumes the pure core (segmentation, fixation, timing) and
exposes RenderFrames to whoever paints the screen.

HOW: scheduler.py isolates the single outstanding timer, state.py
defines PlaybackState and RenderFrame, controller.py is the state
machine, commands.py maps user input to controller actions.

RULES:
- Only PlaybackController mutates PlaybackState
- Collaborators read RenderFrames, never the live state
"""
