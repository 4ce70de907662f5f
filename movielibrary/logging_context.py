"""
Context management for request and session ID propagation.

Request and session IDs live in contextvars so every log line emitted while
handling a request carries them.
"""

import uuid
from contextvars import ContextVar
from typing import Optional
import structlog

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
session_id_var: ContextVar[Optional[str]] = ContextVar("session_id", default=None)


def generate_request_id() -> str:
    """Generate a unique request ID."""
    return str(uuid.uuid4())


def set_request_id(request_id: Optional[str] = None) -> str:
    """
    Set the request ID in context.

    Args:
        request_id: Optional request ID (generates new one if not provided)

    Returns:
        The request ID that was set
    """
    if request_id is None:
        request_id = generate_request_id()

    request_id_var.set(request_id)
    structlog.contextvars.bind_contextvars(request_id=request_id)
    return request_id


def set_session_id(session_id: str) -> str:
    """Set the session ID in context and bind it to the logger."""
    session_id_var.set(session_id)
    structlog.contextvars.bind_contextvars(session_id=session_id)
    return session_id


def clear_context():
    """
    Clear all context variables.

    Called on request teardown so IDs never leak into the next request.
    """
    request_id_var.set(None)
    session_id_var.set(None)
    structlog.contextvars.clear_contextvars()
