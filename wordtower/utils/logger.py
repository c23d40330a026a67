"""Logging utilities for tower planning and game-service calls."""

from __future__ import annotations

import logging
from typing import Optional


# Third-party loggers that would otherwise echo every HTTP connection at DEBUG.
QUIET_LOGGERS = ("urllib3", "requests")


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging with a sensible formatter.

    Builder steps log at INFO and rejected commits at WARNING, so the default
    level shows the path a build took. At DEBUG the grid reports per-cell
    conflicts; the HTTP stack under :class:`GameClient` stays at WARNING so
    those lines are not buried in connection chatter.
    """

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "wordtower")
