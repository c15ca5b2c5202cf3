"""
Logging setup for the CLI.

The library itself only emits records; the CLI attaches a stderr handler to
the `hquota` logger for the duration of a command and puts the previous
configuration back afterwards.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

_LOGGER_NAME = "hquota"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True, slots=True)
class LoggingState:
    level: int
    handlers: list[logging.Handler]
    propagate: bool


def _level_for_verbosity(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(*, verbosity: int) -> LoggingState:
    logger = logging.getLogger(_LOGGER_NAME)
    previous = LoggingState(
        level=logger.level,
        handlers=list(logger.handlers),
        propagate=logger.propagate,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.handlers = [handler]
    logger.setLevel(_level_for_verbosity(verbosity))
    logger.propagate = False
    return previous


def restore_logging(state: LoggingState) -> None:
    logger = logging.getLogger(_LOGGER_NAME)
    logger.handlers = list(state.handlers)
    logger.setLevel(state.level)
    logger.propagate = state.propagate
