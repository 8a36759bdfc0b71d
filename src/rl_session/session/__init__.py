"""Running per-player tally across the matches of one session."""

from rl_session.session.report import is_regular, rank_players, render_report
from rl_session.session.tally import SessionTally

__all__ = ["SessionTally", "is_regular", "rank_players", "render_report"]
