"""Package logger.

Textual owns the terminal while the browser runs, so log records go to a
file instead of stderr.  Modules import the shared logger with
``from .log import logger``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .core.constants import BROWSER_HOME

logger = logging.getLogger("portfolio_browser")
logger.addHandler(logging.NullHandler())

LOG_PATH = BROWSER_HOME / "browser.log"
_LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(path: Path | None = None, level: int = logging.INFO) -> Path | None:
    """Attach a file handler to the package logger.

    Returns the log path, or None when the file cannot be opened (logging
    then stays a no-op).
    """
    path = path or LOG_PATH
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    return path
