"""Debug log file setup.

Textual owns the terminal, so log records go to a file instead of stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

from kiosk.config import DEBUG_LOG_PATH

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(path: str | None = None, level: int = logging.DEBUG) -> logging.Handler | None:
    """Attach a file handler to the ``kiosk`` logger and return it.

    Returns None when the log file cannot be opened; the app keeps running without it.
    """
    log_path = Path(path or DEBUG_LOG_PATH)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        return None

    handler.setFormatter(logging.Formatter(_FORMAT))
    logger = logging.getLogger("kiosk")
    logger.setLevel(level)
    logger.addHandler(handler)
    logger.propagate = False
    return handler
