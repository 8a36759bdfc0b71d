"""Shared pytest fixtures for test modules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from rl_session.domain.match import MatchRecord, MatchStatLine
from rl_session.session.tally import SessionTally

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture
def tally_of() -> Callable[..., SessionTally]:
    """Build a ``SessionTally`` by merging the given records in order."""

    def _build(*records: MatchRecord) -> SessionTally:
        tally = SessionTally()
        for record in records:
            tally.merge(record)
        return tally

    return _build


@pytest.fixture
def guest_session() -> SessionTally:
    """Ten games where Regular plays all, Frequent six and Guest four."""
    tally = SessionTally()
    for game in range(10):
        players = [MatchStatLine(name="Regular", score=100)]
        if game < 6:
            players.append(MatchStatLine(name="Frequent", score=100, team=1))
        if game < 4:
            players.append(MatchStatLine(name="Guest", score=1000, team=1))
        tally.merge(MatchRecord(team0_score=1, team1_score=0, players=tuple(players)))
    return tally
