"""Replay decoding and per-match statistics extraction."""

from rl_session.replay.boxcars import BoxcarsDecoder
from rl_session.replay.extractor import MatchExtractor, ReplayDecoder

__all__ = ["BoxcarsDecoder", "MatchExtractor", "ReplayDecoder"]
