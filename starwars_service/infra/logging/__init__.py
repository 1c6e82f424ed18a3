"""Logging infrastructure.

Provides structured logging with:
- JSONL format for Loki/Elasticsearch ingestion
- Automatic context injection (correlation_id, operation_name, ...)
- QueueHandler + QueueListener for non-blocking I/O
- Lazy evaluation for expensive debug messages

Basic usage:
    from starwars_service.infra.logging import set_log_context
    import logging

    logger = logging.getLogger(__name__)

    set_log_context(correlation_id="abc-123")
    logger.info("Resolving query")  # record includes correlation_id
"""

from starwars_service.infra.logging.config import (
    configure_logging,
    setup_logging,
    shutdown,
)
from starwars_service.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)
from starwars_service.infra.logging.formatters import JSONFormatter
from starwars_service.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
