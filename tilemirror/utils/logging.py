"""Logging setup for the mirror.

Everything goes to one stdout handler.  ``tilemirror.net`` (raw sends and
batch flushes) can run at its own level, so wire traffic can be traced at
DEBUG without turning the rest of the mirror up with it.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tilemirror.config import MirrorConfig

LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)-5s] %(name)s | %(message)s"
NET_LOGGER = "tilemirror.net"


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {name!r}")
    return level


def setup_logging(config: MirrorConfig) -> None:
    """Install the stdout handler and apply the configured levels."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_level(config.log_level))

    # NOTSET makes the net loggers follow the root level again
    net_level = _level(config.net_log_level) if config.net_log_level else logging.NOTSET
    logging.getLogger(NET_LOGGER).setLevel(net_level)
