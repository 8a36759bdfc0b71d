import dataclasses
import logging

from rl_session.domain.match import METRICS, MatchRecord, MatchResult, MatchStatLine, Outcome
from rl_session.domain.tally import PlayerTally, SessionState

logger = logging.getLogger(__name__)


class SessionTally:
    """Owns the ``SessionState`` of one engine and folds matches into it."""

    def __init__(self, state: SessionState | None = None) -> None:
        self._state = state or SessionState()

    @property
    def state(self) -> SessionState:
        return self._state

    def merge(self, record: MatchRecord) -> None:
        outcome = record.outcome
        updated: dict[str, PlayerTally] = {}
        for line in record.players:
            if not line.name:
                continue
            current = updated.get(line.name) or self._state.players.get(line.name) or PlayerTally()
            updated[line.name] = _fold(current, line, outcome)

        self._state.games_played += 1
        self._state.players.update(updated)
        logger.info("Merged game %d (%d players)", self._state.games_played, len(updated))


def _fold(tally: PlayerTally, line: MatchStatLine, outcome: Outcome) -> PlayerTally:
    result = outcome.classify(line.team)
    changes: dict[str, object] = {
        metric: getattr(tally, metric).add(getattr(line, metric)) for metric in METRICS
    }
    return dataclasses.replace(
        tally,
        times_seen=tally.times_seen + 1,
        wins=tally.wins + (result is MatchResult.WIN),
        losses=tally.losses + (result is MatchResult.LOSS),
        **changes,
    )
