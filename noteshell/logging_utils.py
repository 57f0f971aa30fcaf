"""
Logging setup for the note shell backend.

Modules log through `logging.getLogger(__name__)`, so everything lands
under the "noteshell" logger. The host picks level and format through
ShellConfig. With `structured_logs` on, each record is one JSON line on
stdout, carrying any `extra` context (such as the command name) as keys.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

from .config import ShellConfig

ROOT_LOGGER = "noteshell"

# Attributes every LogRecord has; anything else came in through `extra`
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def _json_safe(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)
    return value


class StructuredJsonFormatter(logging.Formatter):
    """
    Render log records as single-line JSON objects.

    Fixed keys are `timestamp` (UTC ISO 8601, taken from the record),
    `level`, `logger` and `message`. `exception` is added when the record
    carries exception info. Context passed through `extra` follows as
    additional keys; values JSON cannot encode are written as their repr.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        entry.update(
            (key, _json_safe(value))
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_") and key not in entry
        )
        return json.dumps(entry)


def configure_structured_logging(
    level: int = logging.INFO,
    logger_name: str | None = ROOT_LOGGER,
    stream: TextIO | None = None,
) -> logging.Logger:
    """
    Route a logger's output through StructuredJsonFormatter.

    Handlers already attached to the logger are replaced, so calling this
    twice does not duplicate lines.

    Args:
        level: Minimum level to emit
        logger_name: Logger to configure; None means the root logger
        stream: Destination, stdout when omitted

    Returns:
        The configured logger
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(StructuredJsonFormatter())

    logger = logging.getLogger(logger_name)
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    return logger


def configure_logging(config: ShellConfig) -> logging.Logger:
    """Apply the configured level and format to the noteshell logger tree.

    Unknown level names fall back to INFO.
    """
    level = logging.getLevelNamesMapping().get(config.log_level.upper(), logging.INFO)

    if config.structured_logs:
        return configure_structured_logging(level=level)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_shell_logger(name: str) -> logging.Logger:
    """Return the `noteshell.<name>` logger for a shell component."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


class ShellLoggerAdapter(logging.LoggerAdapter):
    """
    Tag every line logged through it with fixed context, e.g. the command name.

    The adapter's context wins over a caller's `extra` with the same key.
    The caller's dict is left untouched.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        kwargs["extra"] = {**(kwargs.get("extra") or {}), **self.extra}
        return msg, kwargs
