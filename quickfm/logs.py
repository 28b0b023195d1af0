"""Process-wide logging setup.

The terminal belongs to the TUI, so records go to a file under the user log
directory instead of stderr.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL_ENV = "QFM_LOG_LEVEL"
LOG_FILENAME = "qfm.log"


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def resolve_level(raw: str | None) -> int:
    """Map a level name such as ``"debug"`` to a logging level, defaulting to INFO."""
    if not raw:
        return logging.INFO
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(log_path: Path | None = None) -> Path | None:
    """Send log records to ``log_path`` (or the default log file).

    Returns the file in use, or ``None`` when it cannot be created; logging is
    then disabled rather than allowed to write over the TUI.
    """
    path = log_path or default_log_path()
    level = resolve_level(os.environ.get(LOG_LEVEL_ENV))
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        logging.basicConfig(level=level, handlers=[logging.NullHandler()])
        return None
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[handler])
    return path
