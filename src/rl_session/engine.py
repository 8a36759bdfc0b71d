"""The replay pipeline: debounce, extract, tally, render, publish.

Events are handled strictly one at a time, so session state is only ever
mutated from this loop and reports come out in the order replays were written.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from rl_session.domain.result import Err
from rl_session.publish.console import ConsolePublisher
from rl_session.replay.boxcars import BoxcarsDecoder
from rl_session.replay.extractor import MatchExtractor
from rl_session.session.report import render_report
from rl_session.session.tally import SessionTally
from rl_session.watch.debouncer import DEFAULT_EXTENSION, EventDebouncer
from rl_session.watch.source import DirectoryWatchSource

if TYPE_CHECKING:
    from collections.abc import AsyncIterable
    from pathlib import Path

    from rl_session.publish.protocol import Publisher
    from rl_session.replay.extractor import ReplayDecoder
    from rl_session.watch.events import RawEvent

logger = logging.getLogger(__name__)


class SessionEngine:
    def __init__(
        self,
        publisher: Publisher,
        *,
        decoder: ReplayDecoder | None = None,
        extension: str = DEFAULT_EXTENSION,
        tally: SessionTally | None = None,
    ) -> None:
        self._publisher = publisher
        self._debouncer = EventDebouncer(extension)
        self._extractor = MatchExtractor(decoder or BoxcarsDecoder())
        self._tally = tally or SessionTally()

    @property
    def tally(self) -> SessionTally:
        return self._tally

    async def handle(self, event: RawEvent) -> str | None:
        """Process one filesystem event, returning the report when a match was tallied."""
        path = self._debouncer.feed(event)
        if path is None:
            return None

        extracted = await asyncio.to_thread(self._extractor.extract, path)
        if isinstance(extracted, Err):
            logger.warning("Skipping %s: %s", extracted.error.path.name, extracted.error.message)
            return None

        self._tally.merge(extracted.value)
        report = render_report(self._tally.state)

        logger.info("Sending stats")
        published = await self._publisher.publish(report)
        if isinstance(published, Err):
            logger.error(
                "Could not publish report for game %d: %s", self._tally.state.games_played, published.error.message
            )
        return report

    async def consume(self, source: AsyncIterable[RawEvent]) -> None:
        async for event in source:
            await self.handle(event)


async def run(
    watch_path: Path,
    publisher: Publisher | None = None,
    *,
    decoder: ReplayDecoder | None = None,
    extension: str = DEFAULT_EXTENSION,
) -> None:
    """Watch *watch_path* and publish a report after every finished replay.

    Runs until the watch source closes; ``WatchSourceError`` propagates.
    """
    engine = SessionEngine(publisher or ConsolePublisher(), decoder=decoder, extension=extension)
    async with DirectoryWatchSource(watch_path) as source:
        await engine.consume(source)
