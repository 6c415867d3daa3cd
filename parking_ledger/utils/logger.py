"""
Centralised logging configuration for the entire application.

Everything goes to the console and to a rotating application log. Ledger
mutations (entries, exits, renewals, removals, price edits) are additionally
written to a separate audit log so the day's cash can be reconciled
without the request noise.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from parking_ledger.config import settings

AUDIT_LOGGERS = (
    "parking_ledger.services.ledger_store",
    "parking_ledger.services.price_config_service",
)

_configured = False


def _rotating_handler(filename: str, level: str, fmt: logging.Formatter) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=os.path.join(settings.LOG_DIR, filename),
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(fmt)
    return handler


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    level = settings.LOG_LEVEL.upper()
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    fmt = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(console)
    root.addHandler(_rotating_handler("app.log", level, fmt))

    # INFO and up only: the audit trail must not depend on LOG_LEVEL=DEBUG noise
    audit = _rotating_handler("ledger-audit.log", "INFO", fmt)
    for name in AUDIT_LOGGERS:
        logging.getLogger(name).addHandler(audit)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Call this at the top of every module."""
    _configure_root_logger()
    return logging.getLogger(name)
