"""Context management for structured logging.

Context fields are stored in a ContextVar so that every log record emitted
while a dispatch call is running carries the same correlation fields,
without passing them through every function.

This approach is:
- Async-safe: each asyncio task sees its own copy
- Implicit: existing logging calls need no changes
- Compatible: works with standard Python logging
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Set logging context for the current task.

    Args:
        **kwargs: Key-value pairs added to every subsequent record.

    Example:
        ```python
        set_log_context(event_kind="order_update", recipient="usr-1***")
        logger.info("Dispatching")  # Includes event_kind and recipient
        ```
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Get a copy of the current logging context."""
    return _log_context.get().copy()


def clear_log_context() -> None:
    """Clear all logging context for the current task."""
    _log_context.set({})


def remove_from_log_context(*keys: str) -> None:
    """Remove specific keys from the logging context.

    Args:
        *keys: Keys to remove from context.
    """
    current = _log_context.get().copy()
    for key in keys:
        current.pop(key, None)
    _log_context.set(current)


class ContextInjectingFilter(logging.Filter):
    """Logging filter that copies the context fields onto each LogRecord.

    Installed on the root logger by configure_logging(), so formatters
    (especially JSONFormatter) see the fields as record attributes.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject context into log record.

        Args:
            record: The log record to enhance with context.

        Returns:
            True (always allow the record to be logged).
        """
        context = _log_context.get()

        for key, value in context.items():
            # Don't overwrite existing attributes
            if not hasattr(record, key):
                setattr(record, key, value)

        return True


class ContextBoundLogger(logging.LoggerAdapter):
    """Logger adapter that binds context to a logger instance.

    Example:
        ```python
        logger = ContextBoundLogger(logging.getLogger(__name__), channel="sms")
        logger.info("Sending")  # Always includes channel

        provider_logger = logger.bind(provider="twilio")
        provider_logger.info("Accepted")  # Includes channel and provider
        ```
    """

    def __init__(self, logger: logging.Logger, **context: Any) -> None:
        """Initialize bound logger with context.

        Args:
            logger: Base logger to wrap.
            **context: Context fields to bind to this logger.
        """
        super().__init__(logger, context)

    def bind(self, **context: Any) -> ContextBoundLogger:
        """Create a new logger with additional bound context."""
        merged = {**self.extra, **context}
        return ContextBoundLogger(self.logger, **merged)

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        """Merge bound context into the record's extra dict.

        Args:
            msg: Log message.
            kwargs: Keyword arguments passed to logging call.

        Returns:
            Tuple of (message, modified kwargs with context in extra).
        """
        extra = kwargs.get("extra", {})
        kwargs["extra"] = {**self.extra, **extra}
        return msg, kwargs


def get_logger(name: str, **context: Any) -> ContextBoundLogger:
    """Get logger with bound context.

    Args:
        name: Logger name.
        **context: Context to add to all log messages.

    Returns:
        Logger adapter with context.
    """
    base_logger = logging.getLogger(name)
    return ContextBoundLogger(base_logger, **context)
