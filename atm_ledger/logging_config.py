"""
Structured Logging Configuration Module

JSON (or plain text) logging for the teller engine. Every engine record
carries ``action`` and ``resource`` fields; card numbers are masked and
PINs never reach a log record.
"""

import logging
import json
from datetime import datetime, timezone
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .config import AtmConfig


ROOT_LOGGER = "atm_ledger"
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(action)s] %(message)s"
STRUCTURED_FIELDS = ("action", "resource", "correlation_id", "details")


class JSONFormatter(logging.Formatter):
    """Render a record as one JSON object per line"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in STRUCTURED_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_entry[name] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class _ActionDefault(logging.Filter):
    """Give records logged outside log_action an ``action`` for TEXT_FORMAT"""

    def filter(self, record):
        if not hasattr(record, "action"):
            record.action = "-"
        return True


def setup_logging(level: str = "INFO", logger_name: str = ROOT_LOGGER,
                  log_format: str = "json") -> logging.Logger:
    """
    Attach a single stderr handler to ``logger_name``.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        logger_name: Logger to configure
        log_format: "json" for JSONFormatter, "text" for TEXT_FORMAT

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.addFilter(_ActionDefault())
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = False

    return logger


def configure_logging(config: 'AtmConfig') -> logging.Logger:
    """Apply ``log_level`` and ``log_format`` from settings to the package logger"""
    return setup_logging(config.log_level, ROOT_LOGGER, config.log_format)


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


def mask_card_number(card_number: int) -> str:
    """Render a card number with everything but the last four digits hidden"""
    digits = str(card_number)
    return "*" * max(len(digits) - 4, 0) + digits[-4:]


def log_action(logger: logging.Logger, level: str, message: str,
               action: Optional[str] = None, resource: Optional[str] = None,
               correlation_id: Optional[str] = None,
               details: Optional[dict] = None):
    """
    Log a teller action with structured fields.

    The record is attributed to the caller of this helper.

    Args:
        logger: Logger instance
        level: Log level name (info, warning, ...)
        message: Log message
        action: Engine operation, e.g. ``withdraw_cash``
        resource: Affected resource, e.g. ``card:****5678``
        correlation_id: Correlation ID supplied by the caller
        details: Amounts, balances and other operation data
    """
    fields = {
        "action": action,
        "resource": resource,
        "correlation_id": correlation_id,
        "details": details,
    }
    logger.log(
        getattr(logging, level.upper()), message,
        extra={k: v for k, v in fields.items() if v is not None},
        stacklevel=2
    )
