"""Structured logging for fluent_dml, built on structlog.

Every event is rendered as one JSON object carrying an ISO-8601 timestamp,
the level and the logger name. Before rendering, fields whose names look like
credentials are replaced with ``[REDACTED]``; bound SQL parameter values are
redacted the same way when the column they belong to looks sensitive.

Settings consulted (see fluent_dml.config.settings):
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL. Default: INFO
- LOG_TO_FILE: also write to a daily rotating file. Default: off
- LOG_FILE_DIR: directory for that file. Default: logs/

Usage:
    >>> from fluent_dml.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("sql.update", sql="UPDATE ...", param_count=2)
"""

import logging
import os
import re
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, MutableMapping, Sequence

import structlog
from structlog.types import EventDict, Processor

from fluent_dml.config import get_settings

# Field and column names whose values never reach the logs
SENSITIVE_PATTERNS = [
    re.compile(r".*password.*", re.IGNORECASE),
    re.compile(r".*passwd.*", re.IGNORECASE),
    re.compile(r".*token.*", re.IGNORECASE),
    re.compile(r".*api_key.*", re.IGNORECASE),
    re.compile(r".*secret.*", re.IGNORECASE),
    re.compile(r"^DATABASE_URL$", re.IGNORECASE),
]

REDACTED_VALUE = "[REDACTED]"


def is_sensitive(name: str) -> bool:
    """True when a field or column name matches a sensitive pattern."""
    return any(pattern.match(name) for pattern in SENSITIVE_PATTERNS)


def sanitize_for_logging(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``data`` with sensitive values redacted, recursing into dicts.

    Example:
        >>> sanitize_for_logging({"password": "secret123", "user": "admin"})
        {'password': '[REDACTED]', 'user': 'admin'}
    """
    sanitized: Dict[str, Any] = {}
    for key, value in data.items():
        if is_sensitive(key):
            sanitized[key] = REDACTED_VALUE
        elif isinstance(value, dict):
            sanitized[key] = sanitize_for_logging(value)
        else:
            sanitized[key] = value
    return sanitized


def redact_bound_parameters(columns: Sequence[str], values: Sequence[Any]) -> List[Any]:
    """Redact the bind values whose column name is sensitive.

    ``columns`` names the leading values in order; values past the named
    columns (WHERE parameters, for instance) are kept as they are.

    Example:
        >>> redact_bound_parameters(["name", "password_hash"], ["ada", "x1", 7])
        ['ada', '[REDACTED]', 7]
    """
    redacted = list(values)
    for index, column in enumerate(columns[: len(redacted)]):
        if is_sensitive(column):
            redacted[index] = REDACTED_VALUE
    return redacted


def sanitization_processor(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> MutableMapping[str, Any]:
    """structlog processor applying sanitize_for_logging to each event."""
    return sanitize_for_logging(dict(event_dict))


def _get_log_level() -> int:
    try:
        level_name = get_settings().LOG_LEVEL.upper()
    except Exception:
        # Invalid settings must not prevent logging from being configured.
        level_name = os.getenv("LOG_LEVEL", "INFO").upper()

    return getattr(logging, level_name, logging.INFO)


def _should_log_to_file() -> bool:
    try:
        return bool(get_settings().LOG_TO_FILE)
    except Exception:
        return os.getenv("LOG_TO_FILE", "").lower() in ("1", "true", "yes")


def _get_log_file_path() -> Path:
    """Daily log file path: <LOG_FILE_DIR>/fluent-dml-YYYYMMDD.log."""
    try:
        log_dir = Path(get_settings().LOG_FILE_DIR)
    except Exception:
        log_dir = Path(os.getenv("LOG_FILE_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    return log_dir / f"fluent-dml-{datetime.now():%Y%m%d}.log"


def _configure_structlog() -> None:
    """Attach stdout (and optionally file) handlers and set the structlog pipeline."""
    level = _get_log_level()
    logging.basicConfig(format="%(message)s", level=level, handlers=[])

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if _should_log_to_file():
        handlers.append(
            TimedRotatingFileHandler(
                filename=str(_get_log_file_path()),
                when="midnight",
                interval=1,
                backupCount=30,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setLevel(level)
        logging.root.addHandler(handler)

    processors: List[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        sanitization_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


_configure_structlog()


def get_logger(name: str) -> Any:
    """Return a structlog logger named ``name`` (usually the caller's ``__name__``)."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> Any:
    """Return a logger with ``kwargs`` bound to every event it emits.

    Example:
        >>> logger = bind_context(dialect="postgresql", table="users")
        >>> logger.debug("sql.insert", param_count=3)
    """
    return structlog.get_logger().bind(**kwargs)
