"""Text-processing core: segmentation, fixation point, and timing.

WHY: These three pure modules hold every rule about how a word is cut,
classified, and timed. They have no state and no I/O, so the playback
controller and the renderer can depend on them freely.

HOW: words.py defines the value objects, segmenter.py builds them from
raw text, fixation.py finds the focus letter, timing.py turns a rate and
a multiplier into milliseconds.

RULES:
- Pure functions only; no scheduling, logging, or global state here
- WordUnit / WordSequence are the contract with the playback layer
"""
