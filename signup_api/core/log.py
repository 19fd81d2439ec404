"""Logging setup: console output plus one rotating file per level."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 10

# file name -> minimum level written to it
LEVEL_FILES = (
    ("error.log", logging.ERROR),
    ("warn.log", logging.WARNING),
    ("info.log", logging.INFO),
    ("debug.log", logging.DEBUG),
)

logger = logging.getLogger(__name__)

_installed_handlers: list[logging.Handler] = []


def configure_logging(log_dir: str | Path, level: str = "INFO") -> None:
    """Attach console and per-level file handlers to the root logger.

    Calling it again replaces the handlers installed by the previous call,
    so reloading the app never duplicates log lines.
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    for handler in _installed_handlers:
        root.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(numeric_level)
    console.setFormatter(formatter)
    _installed_handlers.append(console)

    for filename, file_level in LEVEL_FILES:
        file_handler = RotatingFileHandler(
            log_path / filename,
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        _installed_handlers.append(file_handler)

    for handler in _installed_handlers:
        root.addHandler(handler)
    root.setLevel(numeric_level)

    logger.info("Logging configured in %s at level %s", log_path, logging.getLevelName(numeric_level))
