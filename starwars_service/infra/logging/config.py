"""Logging configuration setup.

Configures the root logger with:
- dictConfig for formatters and filters
- QueueHandler + QueueListener so request coroutines never block on I/O
- ContextInjectingFilter for automatic context propagation
- JSONL output for machine parsing, or plain text for local development
"""

from __future__ import annotations

import atexit
import logging
import logging.config
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import Queue
from typing import TYPE_CHECKING, Any

from starwars_service.infra.logging.context import ContextInjectingFilter
from starwars_service.infra.logging.formatters import JSONFormatter

if TYPE_CHECKING:
    from starwars_service.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)

_TEXT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_log_queue: Queue[logging.LogRecord] | None = None
_listener: QueueListener | None = None
_queue_handler: QueueHandler | None = None
_LOGGING_INITIALIZED = False
_SHUTDOWN_REGISTERED = False


def shutdown() -> None:
    """Stop the QueueListener, flushing pending records.

    Registered with ``atexit``; safe to call more than once.
    """
    global _log_queue, _listener, _queue_handler

    if _listener is not None:
        _listener.stop()
        _listener = None
    if _queue_handler is not None:
        logging.getLogger().removeHandler(_queue_handler)
        _queue_handler = None
    _log_queue = None


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
        **configure_kwargs: Explicit overrides for configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    if log_settings is None:
        from starwars_service.core.settings import get_logging_settings

        log_settings = get_logging_settings()

    configure_logging(**{**log_settings.to_logging_kwargs(), **configure_kwargs})
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    file_path: str | Path | None = None,
    json_logs: bool = True,
    console_enabled: bool = True,
    include_context: bool = True,
    service_name: str = "starwars-service",
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    capture_warnings: bool = True,
    **kwargs: Any,
) -> None:
    """Configure logging with dictConfig and the QueueHandler pattern.

    All handlers hang off a QueueListener; the root logger only gets a
    QueueHandler. Application loggers propagate to the root.

    Args:
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file_path: Path to a rotating log file. None disables file logging.
        json_logs: Emit JSON Lines instead of human-readable text.
        console_enabled: Log to stderr.
        include_context: Install ContextInjectingFilter on the root queue handler.
        service_name: Static ``service`` field in JSON records.
        file_max_bytes: Maximum log file size before rotation.
        file_backup_count: Number of rotated log files to keep.
        capture_warnings: Forward Python warnings to logging.
        **kwargs: Ignored extra settings.

    Example:
        from starwars_service.core.settings import get_logging_settings

        configure_logging(**get_logging_settings().to_logging_kwargs())
    """
    global _log_queue, _listener, _queue_handler, _SHUTDOWN_REGISTERED

    shutdown()

    if capture_warnings:
        logging.captureWarnings(True)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "root": {
                "level": log_level.upper(),
                "handlers": [],
            },
        }
    )

    handlers = _build_handlers(
        file_path=Path(file_path) if file_path else None,
        json_logs=json_logs,
        console_enabled=console_enabled,
        service_name=service_name,
        file_max_bytes=file_max_bytes,
        file_backup_count=file_backup_count,
    )

    _log_queue = Queue()
    if handlers:
        _listener = QueueListener(_log_queue, *handlers, respect_handler_level=True)
        _listener.start()
        if not _SHUTDOWN_REGISTERED:
            atexit.register(shutdown)
            _SHUTDOWN_REGISTERED = True

    _queue_handler = QueueHandler(_log_queue)
    if include_context:
        # Logger filters skip propagated records; handler filters run in the
        # caller, where the context variables are set
        _queue_handler.addFilter(ContextInjectingFilter())
    logging.getLogger().addHandler(_queue_handler)

    if kwargs:
        logger.debug("Unused logging kwargs supplied: %s", ", ".join(sorted(kwargs)))


def _build_handlers(
    *,
    file_path: Path | None,
    json_logs: bool,
    console_enabled: bool,
    service_name: str,
    file_max_bytes: int,
    file_backup_count: int,
) -> list[logging.Handler]:
    """Create the handlers the QueueListener writes to."""
    if json_logs:
        formatter: logging.Formatter = JSONFormatter(static={"service": service_name})
    else:
        formatter = logging.Formatter(fmt=_TEXT_FORMAT, datefmt=_DATE_FORMAT)

    handlers: list[logging.Handler] = []
    if console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    if file_path:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            file_path,
            maxBytes=file_max_bytes,
            backupCount=file_backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    return handlers


__all__ = ["configure_logging", "setup_logging", "shutdown"]
