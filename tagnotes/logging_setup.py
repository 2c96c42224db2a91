from __future__ import annotations

import logging
import os
import sys
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path

from tagnotes.settings import APP_NAME, LOG_DIR, LOG_PATH

SESSION_ID = uuid.uuid4().hex[:8]

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s | sid=%(session)s"
LOG_MAX_BYTES = 2 * 1024 * 1024
LOG_BACKUPS = 5

# QtMsgType -> logging level
_QT_LEVELS = {
    0: logging.DEBUG,     # QtDebugMsg
    1: logging.WARNING,   # QtWarningMsg
    2: logging.ERROR,     # QtCriticalMsg
    3: logging.CRITICAL,  # QtFatalMsg
    4: logging.INFO,      # QtInfoMsg
}


class SessionFilter(logging.Filter):
    """Stamps every record with the session id so the format never misses it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session = getattr(record, "session", SESSION_ID)
        return True


def _console_level() -> int:
    name = os.environ.get("TAGNOTES_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(SessionFilter())
    logger.addHandler(handler)


def configure_logging(log_path: Path = LOG_PATH) -> logging.Logger:
    """
    Set up the ``tagnotes`` logger: rotating debug file plus console.

    Safe to call twice; the second call returns the configured logger.
    Child loggers (``logging.getLogger(__name__)``) propagate here.
    """
    logger = logging.getLogger(APP_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    Path(log_path).parent.mkdir(parents=True, exist_ok=True)
    _attach(
        logger,
        RotatingFileHandler(log_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"),
        logging.DEBUG,
    )
    _attach(logger, logging.StreamHandler(sys.stdout or sys.stderr), _console_level())

    logger.info("Logging initialized. log_dir=%s sid=%s", LOG_DIR, SESSION_ID)
    return logger


log = configure_logging()


def _on_qt_message(mode, context, message) -> None:
    where = "{}:{} {}".format(
        getattr(context, "file", None) or "?",
        getattr(context, "line", None) or 0,
        getattr(context, "function", None) or "",
    ).strip()
    try:
        level = _QT_LEVELS.get(int(mode), logging.WARNING)
    except (TypeError, ValueError):
        level = logging.WARNING
    log.log(level, "Qt: %s | where=%s", message, where)


def install_global_exception_hooks() -> None:
    """Route uncaught Python exceptions and Qt runtime messages into the log."""
    previous = sys.excepthook

    def _excepthook(exc_type, exc, tb):
        log.critical("Uncaught exception", exc_info=(exc_type, exc, tb))
        previous(exc_type, exc, tb)

    sys.excepthook = _excepthook

    try:
        from PySide6.QtCore import qInstallMessageHandler
    except ImportError:
        log.exception("Qt message handler unavailable")
        return
    qInstallMessageHandler(_on_qt_message)
    log.info("Qt message handler installed")
