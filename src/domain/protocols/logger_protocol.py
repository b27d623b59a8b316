"""LoggerProtocol definition for structured logging.

Backend-agnostic structured logging port. Application handlers and
presentation dependencies log security events through it.

Security:
    - NEVER log passwords, raw tokens or signing secrets
    - Token hashes may be logged truncated to a short prefix

Usage:
    logger: LoggerProtocol = get_logger()
    logger.warning("refresh_token_reuse_detected", user_id=str(user_id))
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    All logging calls are structured: event name + key-value context.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name.
            error: Optional exception; adapters add error_type/error_message.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message."""
        ...

    def bind(self, **context: Any) -> "LoggerProtocol":
        """Return new logger with permanently bound context.

        Example:
            request_logger = logger.bind(trace_id=trace_id, ip_address=ip)
            request_logger.info("login_succeeded")
        """
        ...
