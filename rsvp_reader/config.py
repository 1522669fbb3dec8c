"""Configuration constants, rate bounds, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. Rate bounds, punctuation classes, and sync
defaults are plain data structures, not buried in logic, so the
segmenter, timing model, and controller all agree on the same numbers.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level values. Environment-backed defaults go through
_env_int(), which raises a clear error for malformed values.

RULES:
- MIN_WPM / MAX_WPM / WPM_STEP bound the stepped rate control only;
  direct rate sets accept any positive value
- Sentence-end punctuation is checked before clause-end punctuation
- All environment defaults can be overridden via .env or the process env
- Malformed environment values raise ValueError naming the variable
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    """Read a positive integer from the environment.

    RULES:
    - Missing or blank → default
    - Non-numeric or below ``minimum`` → ValueError naming the variable
    """
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError("{} must be an integer, got {!r}".format(name, raw))
    if value < minimum:
        raise ValueError("{} must be >= {}, got {}".format(name, minimum, value))
    return value


_LOG_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_log_level(name: str, default: str) -> str:
    """Read a logging level name from the environment.

    RULES:
    - Missing or blank → default; matching is case-insensitive
    - Anything but a standard level name → ValueError naming the variable
    """
    raw = os.getenv(name, "").strip().upper()
    if not raw:
        return default
    if raw not in _LOG_LEVEL_NAMES:
        raise ValueError("{} must be one of {}, got {!r}".format(
            name, ", ".join(_LOG_LEVEL_NAMES), raw,
        ))
    return raw


# ---------------------------------------------------------------------------
# Reading rate
# ---------------------------------------------------------------------------

MIN_WPM = 100
MAX_WPM = 600
WPM_STEP = 50

WPM_OPTIONS: list[int] = list(range(MIN_WPM, MAX_WPM + 1, WPM_STEP))
"""Values reachable through the stepped rate control (100, 150, ..., 600)."""

DEFAULT_WPM = _env_int("RSVP_DEFAULT_WPM", 300)

# ---------------------------------------------------------------------------
# Punctuation classes and delay multipliers
# ---------------------------------------------------------------------------

SENTENCE_END_CHARS: frozenset[str] = frozenset({".", "!", "?"})
CLAUSE_END_CHARS: frozenset[str] = frozenset({",", ";", ":"})

SENTENCE_END_MULTIPLIER = 1.5
CLAUSE_END_MULTIPLIER = 1.2
DEFAULT_MULTIPLIER = 1.0

# ---------------------------------------------------------------------------
# Position sync
# ---------------------------------------------------------------------------

AUTO_SAVE_EVERY = _env_int("RSVP_AUTO_SAVE_EVERY", 5)
SYNC_DEBOUNCE_MS = _env_int("RSVP_SYNC_DEBOUNCE_MS", 1000, minimum=0)

LOG_LEVEL = _env_log_level("RSVP_LOG_LEVEL", "WARNING")
