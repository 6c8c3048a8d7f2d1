"""Application-wide logging to a rotating file in platformdirs user_log_dir.

All TaskFlow modules log below the ``taskflow`` logger so a single handler
collects everything. Nothing is written to the console; user-facing output
goes through :mod:`taskflow.ui.formatters`.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "taskflow"
_LOG_FILE = "taskflow.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_root: logging.Logger | None = None


def _configure_root() -> logging.Logger:
    global _root
    if _root is not None:
        return _root

    root = logging.getLogger(_APP_NAME)
    root.setLevel(logging.DEBUG)
    root.propagate = False

    # Other handlers (e.g. pytest's log capture) may already be attached
    if not any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers
    ):
        log_dir = Path(user_log_dir(_APP_NAME))
        log_dir.mkdir(parents=True, exist_ok=True)

        handler = logging.handlers.RotatingFileHandler(
            log_dir / _LOG_FILE,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
        root.addHandler(handler)

    _root = root
    return _root


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the application logger, or a named child of it.

    The file handler is attached on first call. ``get_logger("store")``
    returns ``taskflow.store``.
    """
    root = _configure_root()
    if name is None:
        return root
    return root.getChild(name)
