"""Logging setup shared by the library modules and the CLI."""
from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "jobagent.log"
LOG_BACKUP_DAYS = 14

_QUIET_LOGGERS = ("urllib3", "charset_normalizer", "pypdf")
_configured = False
_console: logging.Handler | None = None


def _log_dir() -> Path:
    home = os.environ.get("JOBAGENT_HOME")
    base = Path(home) if home else Path(__file__).resolve().parent.parent
    return base / "logs"


def configure_logging(level: str | int | None = None, log_file: bool | None = None) -> None:
    """Install the console (stderr) and rotating file handlers on the root logger.

    *level* defaults to ``LOG_LEVEL`` from the environment. The file handler is
    skipped when *log_file* is false or ``JOBAGENT_NO_LOG_FILE`` is set. Calling
    again only adjusts the level.
    """
    global _configured, _console
    if level is None:
        level = os.environ.get("LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    if _configured:
        if _console is not None:
            _console.setLevel(level)
        return
    _configured = True

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # pytest and other hosts may already own the root handlers
    if root.handlers:
        return

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)
    _console = console

    if log_file is None:
        log_file = not os.environ.get("JOBAGENT_NO_LOG_FILE")
    if not log_file:
        return
    try:
        log_dir = _log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.handlers.TimedRotatingFileHandler(
            log_dir / LOG_FILE_NAME, when="midnight", backupCount=LOG_BACKUP_DAYS, encoding="utf-8",
        )
    except OSError as exc:
        logging.getLogger(__name__).warning("File logging disabled: %s", exc)
        return
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(formatter)
    root.addHandler(fh)


def get_logger(name: str) -> logging.Logger:
    """Return a named logger, configuring defaults on first use."""
    if not _configured:
        configure_logging()
    return logging.getLogger(name)
