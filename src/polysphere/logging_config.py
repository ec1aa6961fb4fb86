"""Opt-in log output for the ``polysphere`` logger namespace.

Modules only create loggers with ``logging.getLogger(__name__)``; nothing
is configured on import.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    """Send ``polysphere`` log records at *level* or above to *stream*.

    *stream* defaults to ``sys.stdout``.  Calling again replaces the
    handler installed by the previous call.
    """
    logger = logging.getLogger("polysphere")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler = logging.StreamHandler(sys.stdout if stream is None else stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
