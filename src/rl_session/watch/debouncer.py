"""Turns raw filesystem notifications into one "replay ready" signal per file.

The replay uploader opens the file (Created) and then writes its contents
(Modified), so a single save shows up as a Created/Modified pair on the same
path. Any other ordering is treated as noise.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rl_session.watch.events import EventKind, RawEvent

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = "replay"


class EventDebouncer:
    """Single-slot debounce state machine.

    Only one file is tracked between Created and Modified. A Created event for
    another path replaces the pending one, abandoning it.
    """

    def __init__(self, extension: str = DEFAULT_EXTENSION) -> None:
        self._suffix = f".{extension}"
        self._pending: Path | None = None

    @property
    def pending(self) -> Path | None:
        return self._pending

    def feed(self, event: RawEvent) -> Path | None:
        """Consume one event, returning the path of a replay that is ready to read."""
        match event.kind:
            case EventKind.CREATED:
                logger.info("Replay created: %s", event.path.name)
                logger.info("Waiting for write")
                self._pending = event.path
                return None
            case EventKind.MODIFIED:
                if self._pending is None or self._pending != event.path:
                    return None
            case _:
                return None

        self._pending = None
        logger.info("Replay written: %s", event.path.name)
        if event.path.suffix != self._suffix:
            logger.debug("Ignoring %s: expected a %s file", event.path.name, self._suffix)
            return None
        return event.path
