"""
Flask middleware for structured logging.

This module provides Flask middleware to:
- Inject request_id and session_id into logging context
- Log HTTP request/response details
- Record request count and duration metrics
"""

import time
from flask import Flask, request, g, session
from movielibrary.logging_config import get_logger
from movielibrary.logging_context import (
    set_request_id,
    set_session_id,
    clear_context,
)
from movielibrary.metrics import track_http_request

logger = get_logger(__name__)


def init_logging_middleware(app: Flask):
    """
    Initialize logging middleware for Flask application.

    Args:
        app: Flask application instance
    """

    @app.before_request
    def before_request_logging():
        request_id = set_request_id()
        g.request_id = request_id
        g.request_start_time = time.time()

        if 'session_id' in session:
            set_session_id(session['session_id'])

        logger.info(
            "request_started",
            method=request.method,
            path=request.path,
            remote_addr=request.remote_addr,
            user_agent=request.headers.get('User-Agent', 'Unknown'),
        )

    @app.after_request
    def after_request_logging(response):
        duration = None
        if hasattr(g, 'request_start_time'):
            duration = time.time() - g.request_start_time
            track_http_request(
                request.method,
                request.url_rule.rule if request.url_rule else request.path,
                response.status_code,
                duration,
            )

        logger.info(
            "request_completed",
            method=request.method,
            path=request.path,
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2) if duration is not None else None,
        )

        # Add request ID to response headers for tracing
        if hasattr(g, 'request_id'):
            response.headers['X-Request-ID'] = g.request_id

        return response

    @app.teardown_request
    def teardown_request_logging(exception=None):
        if exception:
            logger.error(
                "request_failed",
                method=request.method,
                path=request.path,
                error=str(exception),
                exc_info=True,
            )

        clear_context()
