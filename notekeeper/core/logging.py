"""
Centralized Logging Configuration.

Every module logs through structlog loggers obtained from get_logger().
Output handlers are configured once per process by setup_logging(), from
the validated logging.yaml settings plus optional overrides.

Structured fields in every JSON log record:
    timestamp   - ISO 8601 UTC timestamp
    level       - Log level (debug, info, warning, error, critical)
    logger      - Module path (e.g., notekeeper.services.note)
    event       - Log message
    func_name   - Function that emitted the log
    lineno      - Line number in source file
    source      - Origin context (cli, store, session); "unknown" if unset

Usage:
    from notekeeper.core.logging import get_logger, setup_logging

    setup_logging()                                   # logging.yaml
    setup_logging(level="DEBUG", enable_console=True)  # CLI --debug

    logger = get_logger(__name__)
    logger.info("Note created", extra={"note_id": 3})

Log File:
    logs/system.jsonl, rotated by size. Filter by the 'source' field.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from notekeeper.core.config import find_project_root, get_app_config, get_settings
from notekeeper.core.config_schema import FileHandlerSchema

VALID_SOURCES = frozenset({
    "cli",
    "store",
    "session",
    "internal",
    "unknown",
})
"""Recognized values of the 'source' field."""

# Third-party loggers that are noisy at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite")


def add_default_source(
    logger: WrappedLogger, method_name: str, event_dict: EventDict,
) -> EventDict:
    """Structlog processor that marks records without a source as 'unknown'."""
    event_dict.setdefault("source", "unknown")
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
        add_default_source,
    ]


def _formatter(renderer: Processor, processors: list[Processor]) -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=processors,
    )


def _file_handler(file_config: FileHandlerSchema) -> RotatingFileHandler:
    """Rotating JSONL handler; relative paths resolve from the project root."""
    log_path = find_project_root() / file_config.path
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        filename=str(log_path),
        maxBytes=file_config.max_bytes,
        backupCount=file_config.backup_count,
        encoding="utf-8",
    )


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structured logging for the process.

    Precedence for the level: the level argument, then
    NOTEKEEPER_LOG_LEVEL, then logging.yaml. The other arguments
    override their logging.yaml counterparts when given.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Console output format, 'json' or 'console'
        enable_console: Whether to log to stderr
        enable_file_logging: Whether to write logs/system.jsonl
    """
    config = get_app_config().logging
    handlers = config.handlers

    effective_level = level or get_settings().log_level or config.level
    effective_format = format_type or config.format
    console_enabled = handlers.console.enabled if enable_console is None else enable_console
    file_enabled = handlers.file.enabled if enable_file_logging is None else enable_file_logging

    processors = _shared_processors()
    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    json_formatter = _formatter(structlog.processors.JSONRenderer(), processors)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, effective_level.upper()))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if console_enabled:
        # stderr, so command output on stdout stays clean
        console_handler = logging.StreamHandler(sys.stderr)
        if effective_format == "console":
            console_handler.setFormatter(
                _formatter(structlog.dev.ConsoleRenderer(colors=True), processors)
            )
        else:
            console_handler.setFormatter(json_formatter)
        root_logger.addHandler(console_handler)

    if file_enabled:
        file_handler = _file_handler(handlers.file)
        file_handler.setFormatter(json_formatter)
        root_logger.addHandler(file_handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name, typically __name__

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log a message with an explicit source.

    Raises:
        AttributeError: If level is not a valid log level

    Example:
        log_with_source(logger, "session", "info", "Note saved", note_id=3)
    """
    getattr(logger, level.lower())(message, source=source, **kwargs)
