"""File-based logging setup.

The terminal owns stdout and stderr while the picker runs, so log records
only go to a file, and only when one is requested.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_LEVEL = logging.WARNING


def configure_logging(log_file: Path | None, level: int | None = None) -> logging.Handler:
    """Attach a handler to the ``pathpick`` logger and return it.

    Without ``log_file`` a ``NullHandler`` is installed so records are dropped.
    """
    package_logger = logging.getLogger("pathpick")
    handler: logging.Handler
    if log_file is None:
        handler = logging.NullHandler()
    else:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8", delay=True)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(level if level is not None else DEFAULT_LEVEL)
    package_logger.propagate = False
    return handler


__all__ = ["DEFAULT_LEVEL", "LOG_FORMAT", "configure_logging"]
