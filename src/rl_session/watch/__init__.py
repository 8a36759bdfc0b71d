"""Replay folder observation.

Public API:
    DirectoryWatchSource(path) -> async iterator of RawEvent
    EventDebouncer(extension).feed(event) -> Path | None
"""

from rl_session.watch.debouncer import DEFAULT_EXTENSION, EventDebouncer
from rl_session.watch.events import EventKind, RawEvent
from rl_session.watch.source import DirectoryWatchSource

__all__ = ["DEFAULT_EXTENSION", "DirectoryWatchSource", "EventDebouncer", "EventKind", "RawEvent"]
