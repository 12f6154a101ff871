"""Logging setup for command-line use.

Library modules only create ``logging.getLogger(__name__)`` loggers; this
attaches a stderr handler to the package logger once.
"""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "filehandle"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "WARNING", stream=None) -> logging.Logger:
    """Configure the ``filehandle`` logger and return it.

    Unknown level names fall back to ``WARNING``. Calling again replaces the
    handler installed by the previous call instead of stacking a new one.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_filehandle_cli", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._filehandle_cli = True
    logger.addHandler(handler)
    level_value = getattr(logging, str(level).upper(), None)
    logger.setLevel(level_value if isinstance(level_value, int) else logging.WARNING)
    logger.propagate = False
    return logger
