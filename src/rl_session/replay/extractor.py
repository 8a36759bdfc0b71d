"""Normalizes decoded replay headers into ``MatchRecord`` values."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Protocol

from rl_session.domain.errors import DecodeError, ExtractError
from rl_session.domain.match import MatchRecord, MatchStatLine
from rl_session.domain.result import Err, Ok, Result

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

PLAYER_STATS = "PlayerStats"
TEAM0_SCORE = "Team0Score"
TEAM1_SCORE = "Team1Score"

_STAT_KEYS: dict[str, str] = {
    "score": "Score",
    "goals": "Goals",
    "assists": "Assists",
    "saves": "Saves",
    "shots": "Shots",
}


class ReplayDecoder(Protocol):
    def decode(self, data: bytes) -> Mapping[str, object]: ...


class MatchExtractor:
    def __init__(self, decoder: ReplayDecoder) -> None:
        self._decoder = decoder

    def extract(self, path: Path) -> Result[MatchRecord, ExtractError]:
        try:
            data = path.read_bytes()
        except OSError as e:
            return Err(ExtractError(message=f"Could not read replay: {e}", path=path))

        try:
            properties = self._decoder.decode(data)
        except DecodeError as e:
            return Err(ExtractError(message=f"Could not decode replay: {e}", path=path))

        stats = properties.get(PLAYER_STATS)
        if stats is None:
            return Err(ExtractError(message="No PlayerStats for replay", path=path))
        if isinstance(stats, (str, bytes, Mapping)) or not isinstance(stats, Sequence):
            return Err(ExtractError(message="PlayerStats is not an array", path=path))

        lines: list[MatchStatLine] = []
        for entry in stats:
            fields = _as_mapping(entry)
            if fields is None:
                return Err(ExtractError(message="PlayerStats entry is not a property set", path=path))
            line = _stat_line(fields)
            if line is not None:
                lines.append(line)

        return Ok(
            MatchRecord(
                team0_score=_int_property(properties, TEAM0_SCORE),
                team1_score=_int_property(properties, TEAM1_SCORE),
                players=tuple(lines),
            )
        )


def _as_mapping(entry: object) -> Mapping[str, object] | None:
    # boxcars may serialize a property set either as a map or as (key, value) pairs.
    if isinstance(entry, Mapping):
        return entry
    if isinstance(entry, Sequence) and not isinstance(entry, (str, bytes)):
        pairs: dict[str, object] = {}
        for pair in entry:
            if not isinstance(pair, Sequence) or isinstance(pair, (str, bytes)) or len(pair) != 2:
                return None
            key, value = pair
            pairs[str(key)] = value
        return pairs
    return None


def _stat_line(fields: Mapping[str, object]) -> MatchStatLine | None:
    name = fields.get("Name")
    if not isinstance(name, str) or not name:
        logger.debug("Skipping player entry without a name")
        return None
    values = {attr: _int_field(fields, key, name, non_negative=True) for attr, key in _STAT_KEYS.items()}
    team = _int_field(fields, "Team", name, non_negative=False)
    return MatchStatLine(name=name, team=team, **values)


def _int_field(fields: Mapping[str, object], key: str, name: str, *, non_negative: bool) -> int:
    value = fields.get(key)
    if isinstance(value, int) and not isinstance(value, bool) and (value >= 0 or not non_negative):
        return value
    logger.debug("Defaulting %s to 0 for %s (got %r)", key, name, value)
    return 0


def _int_property(properties: Mapping[str, object], key: str) -> int:
    value = properties.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if value is not None:
        logger.debug("Defaulting %s to 0 (got %r)", key, value)
    return 0
