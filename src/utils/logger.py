"""
Structured logging configuration using structlog.

Provides:
- Structured logging with JSON output (production) or console (development)
- Correlation ID context variables for automatic propagation across logs
- Utilities for setting/clearing correlation context

The engine package logs through stdlib logging; basicConfig here routes
those records to the same stream and level.
"""
import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any, Optional

import structlog
from config import settings


# =============================================================================
# CORRELATION ID CONTEXT VARIABLES
# =============================================================================
# These context variables propagate across async operations and are added
# to all structlog entries via the add_correlation_ids processor.

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
prompt_id_var: ContextVar[Optional[str]] = ContextVar("prompt_id", default=None)
strategy_var: ContextVar[Optional[str]] = ContextVar("strategy", default=None)


def set_correlation_context(
    request_id: Optional[str] = None,
    prompt_id: Optional[str] = None,
    strategy: Optional[str] = None,
) -> None:
    """
    Set correlation IDs in context for automatic log propagation.

    Call this at the start of a request to ensure all downstream
    logs include these correlation IDs.

    Args:
        request_id: HTTP request identifier
        prompt_id: Identifier of the prompt record being evaluated
        strategy: Aggregation strategy in use
    """
    if request_id is not None:
        request_id_var.set(request_id)
    if prompt_id is not None:
        prompt_id_var.set(prompt_id)
    if strategy is not None:
        strategy_var.set(strategy)


def clear_correlation_context() -> None:
    """
    Clear all correlation context variables.

    Call this at the end of a request to prevent context leakage
    between requests.
    """
    request_id_var.set(None)
    prompt_id_var.set(None)
    strategy_var.set(None)


def new_request_id() -> str:
    """Generate a request identifier."""
    return uuid.uuid4().hex[:16]


def add_correlation_ids(
    logger: Any,
    method_name: str,
    event_dict: dict,
) -> dict:
    """
    Structlog processor that adds correlation IDs to all log entries.
    """
    if request_id_var.get():
        event_dict["request_id"] = request_id_var.get()
    if prompt_id_var.get():
        event_dict["prompt_id"] = prompt_id_var.get()
    if strategy_var.get():
        event_dict["strategy"] = strategy_var.get()
    return event_dict


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================


def configure_logging() -> None:
    """Configure structured logging."""

    # Configure standard logging
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
    )

    # Configure structlog
    processors = [
        structlog.contextvars.merge_contextvars,
        add_correlation_ids,  # Add correlation IDs to all logs
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.enable_structured_logging:
        # JSON output for production
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Human-readable output for development
        processors.extend([
            structlog.dev.ConsoleRenderer(colors=True),
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)


# Initialize logging on import
configure_logging()
