"""Logging configuration for the command-line entry point.

Library modules only ever call ``logging.getLogger(__name__)``; the
handler and level are installed here, once, by the CLI root group.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(numeric)
