from collections.abc import Mapping
from typing import Any

from rl_session.domain.errors import DecodeError, PublishError
from rl_session.domain.result import Err, Ok, Result


def player(name: str | None, team: int, **stats: Any) -> dict[str, Any]:
    entry: dict[str, Any] = {"Team": team}
    if name is not None:
        entry["Name"] = name
    for key in ("Score", "Goals", "Assists", "Saves", "Shots"):
        entry[key] = stats.get(key.lower(), 0)
    return entry


def header(team0: int, team1: int, *players: dict[str, Any]) -> dict[str, Any]:
    return {"Team0Score": team0, "Team1Score": team1, "PlayerStats": list(players)}


class FakeDecoder:
    """Decodes files by looking their raw bytes up in a table of header properties."""

    def __init__(self, headers: Mapping[bytes, Mapping[str, object]] | None = None) -> None:
        self._headers = dict(headers or {})
        self.decoded: list[bytes] = []

    def decode(self, data: bytes) -> Mapping[str, object]:
        self.decoded.append(data)
        if data not in self._headers:
            raise DecodeError("corrupt replay")
        return self._headers[data]


class RecordingPublisher:
    def __init__(self) -> None:
        self.published: list[str] = []

    async def publish(self, text: str) -> Result[None, PublishError]:
        self.published.append(text)
        return Ok(None)


class FailingPublisher:
    def __init__(self) -> None:
        self.attempts = 0

    async def publish(self, text: str) -> Result[None, PublishError]:
        self.attempts += 1
        return Err(PublishError(message="webhook down", status_code=503))
