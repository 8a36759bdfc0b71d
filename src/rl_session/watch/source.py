"""Non-recursive directory watcher feeding an asyncio queue.

The watchdog observer runs on its own thread and only hands events over to the
event loop; all processing happens on the loop.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from rl_session.domain.errors import WatchSourceError
from rl_session.watch.events import EventKind, RawEvent

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from watchdog.observers.api import BaseObserver

logger = logging.getLogger(__name__)

_KINDS = {
    EVENT_TYPE_CREATED: EventKind.CREATED,
    EVENT_TYPE_MODIFIED: EventKind.MODIFIED,
}

_CLOSED = object()

HEALTH_CHECK_INTERVAL = 1.0


class _QueueingHandler(FileSystemEventHandler):
    def __init__(self, root: Path, loop: asyncio.AbstractEventLoop, queue: asyncio.Queue[object]) -> None:
        self._root = root
        self._loop = loop
        self._queue = queue

    def on_any_event(self, event: FileSystemEvent) -> None:
        path = Path(os.fsdecode(event.src_path))
        if event.is_directory and path == self._root and event.event_type in (EVENT_TYPE_DELETED, EVENT_TYPE_MOVED):
            self._put(WatchSourceError(f"Watched directory went away: {path}"))
            return
        self._put(RawEvent(kind=_KINDS.get(event.event_type, EventKind.OTHER), path=path))

    def _put(self, item: object) -> None:
        self._loop.call_soon_threadsafe(self._queue.put_nowait, item)


class DirectoryWatchSource:
    """Async iterator of ``RawEvent`` for a single directory.

    Use as an async context manager; iteration ends after ``close()`` and raises
    ``WatchSourceError`` when the directory can no longer be observed. Deletion
    is reported by watchdog itself; a renamed directory or a dead observer
    thread is noticed when no event arrives for ``health_interval`` seconds.
    """

    def __init__(
        self,
        path: Path,
        observer_factory: Callable[[], BaseObserver] = Observer,
        *,
        health_interval: float = HEALTH_CHECK_INTERVAL,
    ) -> None:
        self._path = path.resolve()
        self._health_interval = health_interval
        self._observer_factory = observer_factory
        self._observer: BaseObserver | None = None
        self._queue: asyncio.Queue[object] = asyncio.Queue()

    @property
    def path(self) -> Path:
        return self._path

    async def __aenter__(self) -> DirectoryWatchSource:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def start(self) -> None:
        if not self._path.is_dir():
            raise WatchSourceError(f"Not a directory: {self._path}")
        handler = _QueueingHandler(self._path, asyncio.get_running_loop(), self._queue)
        observer = self._observer_factory()
        try:
            observer.schedule(handler, str(self._path), recursive=False)
            observer.start()
        except OSError as e:
            raise WatchSourceError(f"Could not watch {self._path}: {e}") from e
        self._observer = observer
        logger.debug("Watching %s", self._path)

    def close(self) -> BaseObserver | None:
        """Stop watching and end iteration, returning the observer still to be joined."""
        observer, self._observer = self._observer, None
        if observer is not None:
            observer.stop()
        self._queue.put_nowait(_CLOSED)
        return observer

    async def aclose(self) -> None:
        observer = self.close()
        if observer is not None:
            await asyncio.to_thread(observer.join)

    def __aiter__(self) -> AsyncIterator[RawEvent]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[RawEvent]:
        while True:
            try:
                item = await asyncio.wait_for(self._queue.get(), timeout=self._health_interval)
            except TimeoutError:
                self._check_health()
                continue
            if item is _CLOSED:
                return
            if isinstance(item, WatchSourceError):
                raise item
            assert isinstance(item, RawEvent)
            yield item

    def _check_health(self) -> None:
        # inotify reports nothing when the watched directory itself is renamed.
        if self._observer is None:
            return
        if not self._path.is_dir():
            raise WatchSourceError(f"Watched directory went away: {self._path}")
        if not self._observer.is_alive():
            raise WatchSourceError(f"Stopped watching {self._path}: observer thread died")
