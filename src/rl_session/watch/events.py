from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EventKind(Enum):
    CREATED = "created"
    MODIFIED = "modified"
    OTHER = "other"


@dataclass(frozen=True)
class RawEvent:
    kind: EventKind
    path: Path
