"""Logging setup for ``rl-session run``.

Session progress ("Replay written", "Merged game 3", "Sent stats to discord")
is logged at INFO, so INFO is the default level. ``--verbose`` adds the DEBUG
detail, such as stat fields the extractor defaulted to zero, and lets the
HTTP and filesystem libraries speak.
"""

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Per-request and per-inotify-event chatter.
QUIET_LOGGERS = ("httpx", "httpcore", "watchdog", "discord")


def configure_logging(*, verbose: bool = False, stream: TextIO | None = None) -> logging.Handler:
    """Route every record to *stream* (stderr when omitted), replacing existing root handlers."""
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    quiet_level = logging.NOTSET if verbose else logging.WARNING
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
    return handler
