"""Position sinks: where the sync policy sends (reading, position, rate).

WHY: Persisting the reading position is someone else's job (a database,
a web API, a local file). The sync policy only needs a single call
boundary to hand positions to, so storage and transport stay outside
the engine.

HOW: PositionSink is an ABC with one method, save(). Two adapters ship
with the package:
  CallbackPositionSink — wraps any callable (sync or async) supplied by
                         the host application
  LoggingPositionSink  — records saves through ``logging``; used by the CLI

RULES:
- save() may return None or an awaitable; the policy handles both
- save() may raise; the policy logs the failure and carries on
- Sinks never retry; queueing/retry belongs to the host application
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)


class PositionSink(ABC):
    """Abstract best-effort destination for reading positions."""

    @abstractmethod
    def save(self, reading_id: str, position: int, rate_wpm: int) -> Any:
        """Persist ``position`` and ``rate_wpm`` for ``reading_id``.

        Returns:
            None, or an awaitable the caller may schedule without waiting.
        """


class CallbackPositionSink(PositionSink):
    """Adapter that forwards saves to a host-supplied callable."""

    def __init__(self, callback: Callable[[str, int, int], Any]) -> None:
        self._callback = callback

    def save(self, reading_id: str, position: int, rate_wpm: int) -> Any:
        return self._callback(reading_id, position, rate_wpm)


class LoggingPositionSink(PositionSink):
    """Sink that logs each save and remembers the most recent one.

    WHY: The terminal player has nowhere to persist positions, but the
    user should still see where to resume (``--start``) next time.
    """

    def __init__(self, level: int = logging.INFO) -> None:
        self._level = level
        self.last_saved: Optional[Tuple[str, int, int]] = None

    def save(self, reading_id: str, position: int, rate_wpm: int) -> None:
        self.last_saved = (reading_id, position, rate_wpm)
        logger.log(
            self._level,
            "Saved position for %s: word %d at %d wpm",
            reading_id, position, rate_wpm,
        )
