from dataclasses import dataclass
from enum import Enum

METRICS: tuple[str, ...] = ("score", "goals", "assists", "saves", "shots")


class MatchResult(Enum):
    WIN = "win"
    LOSS = "loss"
    NONE = "none"


@dataclass(frozen=True)
class MatchStatLine:
    name: str
    score: int = 0
    goals: int = 0
    assists: int = 0
    saves: int = 0
    shots: int = 0
    team: int = 0


@dataclass(frozen=True)
class Outcome:
    winner: int | None
    loser: int | None

    @property
    def is_draw(self) -> bool:
        return self.winner is None

    def classify(self, team: int) -> MatchResult:
        if self.winner is not None and team == self.winner:
            return MatchResult.WIN
        if self.loser is not None and team == self.loser:
            return MatchResult.LOSS
        return MatchResult.NONE


@dataclass(frozen=True)
class MatchRecord:
    team0_score: int
    team1_score: int
    players: tuple[MatchStatLine, ...] = ()

    @property
    def outcome(self) -> Outcome:
        if self.team0_score == self.team1_score:
            return Outcome(winner=None, loser=None)
        if self.team0_score > self.team1_score:
            return Outcome(winner=0, loser=1)
        return Outcome(winner=1, loser=0)
