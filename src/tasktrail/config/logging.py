"""Root logger setup for the ``tasktrail`` command."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Held at WARNING outside debug runs.
_CHATTY_LOGGERS = ("alembic", "sqlalchemy.engine")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Log to stderr at ``level``; ``force=True`` replaces existing handlers.

    Migration and engine loggers stay at WARNING unless ``level`` is DEBUG.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    quiet_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
