import importlib
import logging
from collections.abc import Mapping
from typing import Any

from rl_session.domain.errors import DecodeError

logger = logging.getLogger(__name__)

_INSTALL_HINT = (
    "boxcars-py is not installed; install rl-session[boxcars] to decode replays "
    "(prebuilt wheels exist only for CPython 3.7 and 3.8, other versions build it from source with Rust)"
)


class BoxcarsDecoder:
    """Replay decoder backed by the ``boxcars_py`` binding of the boxcars parser.

    The binding always parses the whole replay, network frames included, so a
    replay whose frames it cannot decode fails here even when its header is
    intact. Only the header properties are handed back.
    """

    def __init__(self) -> None:
        self._parse: Any = None

    def decode(self, data: bytes) -> Mapping[str, object]:
        parse = self._load()
        try:
            replay = parse(data)
        except Exception as e:  # the binding raises plain exceptions for corrupt input
            raise DecodeError(str(e)) from e
        if not isinstance(replay, Mapping):
            raise DecodeError(f"Unexpected decoder output: {type(replay).__name__}")
        properties = replay.get("properties")
        if not isinstance(properties, Mapping):
            raise DecodeError("Replay header has no properties")
        return properties

    def _load(self) -> Any:
        if self._parse is None:
            try:
                module = importlib.import_module("boxcars_py")
            except ImportError as e:
                raise DecodeError(_INSTALL_HINT) from e
            self._parse = module.parse_replay
        return self._parse
