from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SessionError:
    message: str


@dataclass(frozen=True)
class ExtractError(SessionError):
    path: Path


@dataclass(frozen=True)
class PublishError(SessionError):
    status_code: int | None = None


class WatchSourceError(Exception):
    """Raised when the watched replay directory can no longer be observed."""


class DecodeError(Exception):
    """Raised by a replay decoder when the file cannot be decoded."""


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
