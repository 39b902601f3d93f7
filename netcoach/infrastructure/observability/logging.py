"""
Structured logging setup for the networking engine.
Provides JSON-formatted logs with consistent fields for batch runs.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import LoggerFactory

from netcoach.config import settings


def setup_logging(log_level: str | None = None) -> None:
    """
    Configure structured logging with JSON output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            defaults to settings.LOG_LEVEL
    """
    log_level = log_level or settings.LOG_LEVEL

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            _add_run_context,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )


def _add_run_context(logger, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Merge context bound via structlog.contextvars (e.g. user_id for a sweep)."""
    return structlog.contextvars.merge_contextvars(logger, method_name, event_dict)


def get_logger(name: str = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_batch_outcome(operation: str, total: int, succeeded: int, failed: int, **context: Any):
    """Log the result of a batch operation with consistent fields."""
    logger = get_logger("batch")

    log_data = {
        "operation": operation,
        "total": total,
        "succeeded": succeeded,
        "failed": failed,
        **context,
    }

    if failed:
        logger.warning("Batch completed with failures", **log_data)
    else:
        logger.info("Batch completed", **log_data)
