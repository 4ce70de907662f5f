"""
Structured JSON logging configuration for Movie Library.

This module sets up structured logging using structlog with:
- JSON formatting for production
- Console formatting for development
- Request/session ID propagation
- Redaction of secrets that end up in log fields
- Configurable log levels via environment variables
"""

import os
import logging
import re
import structlog
from typing import Any, Dict, Optional

# Log level configuration via environment variable
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Field names whose values are always redacted
SENSITIVE_FIELD_NAMES = {
    "secret_key", "secret", "password", "passwd", "pwd",
    "token", "auth", "authorization", "cookie", "set-cookie",
    "api_key", "apikey", "access_token", "refresh_token",
}

# Fields that should never be scrubbed (e.g., request tracking)
SAFE_FIELD_NAMES = {
    "request_id", "session_id", "event", "timestamp", "level",
    "service", "environment", "duration_ms", "status_code",
}

BEARER_PATTERN = re.compile(r'Bearer\s+[A-Za-z0-9_\-\.]+', re.IGNORECASE)


def scrub_sensitive_data(value: Any, parent_key: str = None) -> Any:
    """
    Recursively scrub sensitive data from log entries.

    Args:
        value: Value to scrub (can be dict, list, str, or other)
        parent_key: Parent key name for field-level redaction

    Returns:
        Scrubbed value with sensitive data replaced with [REDACTED]
    """
    if isinstance(value, dict):
        return {k: scrub_sensitive_data(v, k) for k, v in value.items()}
    if isinstance(value, list):
        return [scrub_sensitive_data(item, parent_key) for item in value]

    key = parent_key.lower() if isinstance(parent_key, str) else None
    if key in SAFE_FIELD_NAMES:
        return value
    if key in SENSITIVE_FIELD_NAMES:
        return "[REDACTED]"
    if isinstance(value, str):
        return BEARER_PATTERN.sub('Bearer [REDACTED]', value)
    return value


def add_app_context(logger: Any, method_name: str, event_dict: Dict) -> Dict:
    """
    Add application context to log entries.

    Args:
        logger: Logger instance
        method_name: Logging method name
        event_dict: Event dictionary to enhance

    Returns:
        Enhanced event dictionary
    """
    event_dict["service"] = "movielibrary"
    event_dict["environment"] = os.getenv("APP_ENV", "local")
    return event_dict


def add_scrubbing(logger: Any, method_name: str, event_dict: Dict) -> Dict:
    """Processor to scrub sensitive data from log entries."""
    return scrub_sensitive_data(event_dict)


def configure_structlog():
    """
    Configure structlog for the application.

    Sets up processors, formatters, and output based on environment.
    """
    is_dev = os.getenv("FLASK_ENV") == "development" or os.getenv("DEBUG") == "1"

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_app_context,
        add_scrubbing,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if is_dev:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(LOG_LEVEL)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """
    Get a configured structlog logger.

    Args:
        name: Optional logger name (defaults to calling module)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


# Configure logging on module import
configure_structlog()
