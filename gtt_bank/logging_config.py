"""
Logging for GTT Bank

Every login, ledger mutation and rejection is written as one structured
record. Banking fields (account, action, outcome kind, amount, balance) are
top-level keys of each JSON line so they can be filtered on directly;
anything else goes under "extra".
"""

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .config import BankConfig


ROOT_LOGGER = "gtt_bank"
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Record attributes promoted to top-level JSON keys, in output order
BANK_FIELDS = (
    "account_id", "action", "resource", "kind", "amount", "balance", "correlation_id"
)


def _plain(value: Any) -> Any:
    """Decimals as exact strings, enums as their values"""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    return value


class JSONFormatter(logging.Formatter):
    """One JSON object per record"""

    def format(self, record):
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in BANK_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = _plain(value)

        extra = getattr(record, "extra", None)
        if extra:
            entry["extra"] = _plain(extra)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


def setup_logging(level: str = "INFO", logger_name: str = ROOT_LOGGER,
                  log_format: str = "json") -> logging.Logger:
    """
    Attach a single stream handler to a logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        logger_name: Logger to configure; child loggers inherit it
        log_format: "json" for structured lines, "text" for plain ones

    Returns:
        The configured logger
    """
    logger = logging.getLogger(logger_name)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(level.upper())
    logger.propagate = False
    return logger


def configure_logging(config: "BankConfig", logger_name: str = ROOT_LOGGER) -> logging.Logger:
    """Set up logging from the bank's log_level and log_format settings"""
    return setup_logging(config.log_level, logger_name, log_format=config.log_format)


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    return logging.getLogger(name)


def log_action(logger: logging.Logger, level: str, message: str,
               extra: Optional[dict] = None, **fields):
    """
    Log a banking event.

    Keyword fields must be names from BANK_FIELDS and become top-level keys
    of the JSON line; fields left as None are omitted. Free-form context
    goes in `extra`.

        log_action(logger, "info", "Deposit applied",
                   account_id="12345678", action="deposit",
                   amount=Decimal("100.00"), balance=Decimal("250.00"))
    """
    unknown = set(fields).difference(BANK_FIELDS)
    if unknown:
        raise TypeError(f"Unknown log fields: {', '.join(sorted(unknown))}")

    levelno = getattr(logging, level.upper())
    if not logger.isEnabledFor(levelno):
        return

    attrs = {name: value for name, value in fields.items() if value is not None}
    if extra:
        attrs["extra"] = extra
    logger.log(levelno, message, extra=attrs, stacklevel=2)


def log_failure(logger: logging.Logger, message: str, failure, **fields):
    """Warn about a rejected operation, tagged with its ErrorKind and message"""
    log_action(
        logger, "warning", message,
        extra={"reason": failure.message}, kind=failure.kind, **fields
    )
