from dataclasses import dataclass, field


@dataclass(frozen=True)
class MetricTally:
    """Cumulative total of one metric and its value in the player's latest match."""

    total: int = 0
    last: int = 0

    def add(self, value: int) -> "MetricTally":
        return MetricTally(total=self.total + value, last=value)


@dataclass
class PlayerTally:
    times_seen: int = 0
    wins: int = 0
    losses: int = 0
    score: MetricTally = field(default_factory=MetricTally)
    goals: MetricTally = field(default_factory=MetricTally)
    assists: MetricTally = field(default_factory=MetricTally)
    saves: MetricTally = field(default_factory=MetricTally)
    shots: MetricTally = field(default_factory=MetricTally)


@dataclass
class SessionState:
    players: dict[str, PlayerTally] = field(default_factory=dict)
    games_played: int = 0
