"""
Structured logging configuration for svmscale.

This module provides a centralized setup for structured logging using
`structlog`. Log entries are rendered as JSON and enriched with the service
name, version and logger name. Logs are written to standard error because
standard output carries the scaled dataset.
"""

import logging
import sys
from typing import Any, Dict, Optional

import structlog

from svmscale import __version__
from svmscale.core.config import Settings, get_settings


def setup_structured_logging(settings: Optional[Settings] = None) -> None:
    """Configures structured, JSON-formatted logging for the toolkit.

    Args:
        settings: Settings to read the log level and service name from.
            Defaults to the cached application settings.
    """
    settings = settings or get_settings()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.monitoring.log_level.upper(), logging.WARNING),
        force=True,
    )

    _configure_structlog(settings.monitoring.service_name)


def _configure_structlog(service_name: str) -> None:
    """Routes structlog through stdlib logging with the JSON processor chain."""
    shared_processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        _service_context_processor(service_name),
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=shared_processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def _service_context_processor(service_name: str):
    """Builds a processor that adds service context to log entries."""

    def _add_service_context(
        logger: logging.Logger, method_name: str, event_dict: Dict[str, Any]
    ) -> Dict[str, Any]:
        event_dict.setdefault("service", service_name)
        event_dict.setdefault("version", __version__)

        if method_name in ("error", "exception", "critical"):
            event_dict.setdefault("error_type", "application_error")
            if "exc_info" in event_dict and method_name == "exception":
                event_dict["error_type"] = "exception"

        return event_dict

    return _add_service_context


def log_scaling_operation(
    logger,
    operation: str,
    source: str,
    duration_ms: Optional[float] = None,
    success: bool = True,
    error: Optional[str] = None,
    **details: Any,
) -> None:
    """Logs a standardized message for a dataset operation.

    Reading, range computation, scaling and range-file input/output all
    report through this helper so their entries share the same keys.

    Args:
        logger: The `structlog` logger instance to use.
        operation: The operation performed (e.g. 'read', 'scale', 'save_ranges').
        source: The file or stream the operation worked on.
        duration_ms: The duration of the operation in milliseconds (optional).
        success: Whether the operation succeeded.
        error: An error message if the operation failed (optional).
        **details: Extra fields such as record or feature counts.
    """
    log_data = {
        "operation": operation,
        "source": source,
        "operation_type": "dataset",
        "success": success,
        **details,
    }

    if duration_ms is not None:
        log_data["duration_ms"] = duration_ms

    if error:
        log_data["error"] = error
        logger.error("Dataset operation failed", **log_data)
    else:
        logger.info("Dataset operation completed", **log_data)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Retrieves a `structlog` logger instance.

    Args:
        name: The name of the logger, typically the module's `__name__`.

    Returns:
        A configured `structlog` logger instance.
    """
    return structlog.get_logger(name)


def get_contextual_logger(name: str, **extra_context) -> structlog.stdlib.BoundLogger:
    """Retrieves a logger with additional, permanently bound context.

    Args:
        name: The name of the logger, typically the module's `__name__`.
        **extra_context: Keyword arguments to be bound to the logger's context.

    Returns:
        A `structlog` logger with the specified context bound to it.
    """
    logger = structlog.get_logger(name)
    return logger.bind(**extra_context) if extra_context else logger


# Until setup_structured_logging() runs, records go through stdlib logging and stay silent.
logging.getLogger("svmscale").addHandler(logging.NullHandler())
if not structlog.is_configured():
    _configure_structlog("svm-scale")
