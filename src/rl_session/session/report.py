"""Leaderboard rendering for the current session."""

from rl_session.domain.tally import PlayerTally, SessionState

MIN_REGULAR_GAMES = 3


def is_regular(tally: PlayerTally, games_played: int) -> bool:
    """Whether a player has been around enough of the session to be listed.

    Players seen in every game are always listed. Others need more than
    ``max(3, games_played // 2)`` appearances.
    """
    if tally.times_seen == games_played:
        return True
    return tally.times_seen > max(MIN_REGULAR_GAMES, games_played // 2)


def rank_players(state: SessionState) -> list[tuple[str, PlayerTally]]:
    """Players by cumulative score, highest first; equal scores ordered by name."""
    return sorted(state.players.items(), key=lambda item: (-item[1].score.total, item[0]))


def render_report(state: SessionState) -> str:
    lines = [f"## Game {state.games_played} finished", ""]
    for name, tally in rank_players(state):
        if not is_regular(tally, state.games_played):
            continue
        lines.extend(
            [
                f"### {name}",
                f"*Played {tally.times_seen} games*",
                f"- Wins/Losses: {tally.wins}/{tally.losses}",
                f"- Score: {tally.score.total} ({tally.score.last})",
                f"- Goals: {tally.goals.total} ({tally.goals.last})",
                f"- Assists: {tally.assists.total} ({tally.assists.last})",
                f"- Saves: {tally.saves.total} ({tally.saves.last})",
                f"- Shots: {tally.shots.total} ({tally.shots.last})",
            ]
        )
    return "\n".join(lines) + "\n"
