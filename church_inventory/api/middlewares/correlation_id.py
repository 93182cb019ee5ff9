"""
Correlation ID middleware for Flask application
Tags every request, its log lines and outbound collaborator calls with one ID
"""
import uuid
import logging
from contextvars import ContextVar
from flask import Response, g, request, current_app, has_request_context

# Context variable to store correlation ID for the current request
correlation_id_context: ContextVar[str] = ContextVar('correlation_id', default='')

HEADER = 'X-Correlation-ID'


class CorrelationIdMiddleware:
    """
    Flask middleware for handling correlation IDs
    """

    def __init__(self, app=None):
        self.app = app
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """Initialize the middleware with Flask app"""
        app.before_request(self.before_request)
        app.after_request(self.after_request)

    def before_request(self):
        """Reuse the caller's correlation ID or generate a new one"""
        correlation_id = request.headers.get(HEADER) or str(uuid.uuid4())

        g.correlation_id = correlation_id
        correlation_id_context.set(correlation_id)

        current_app.logger.info(
            f"[{correlation_id}] {request.method} {request.path} - Processing request"
        )

    def after_request(self, response: Response) -> Response:
        """Add correlation ID to response headers"""
        correlation_id = getattr(g, 'correlation_id', 'unknown')
        response.headers[HEADER] = correlation_id

        current_app.logger.info(
            f"[{correlation_id}] {request.method} {request.path} - "
            f"Response: {response.status_code}"
        )
        return response


def get_correlation_id() -> str:
    """Current correlation ID from the request, falling back to the context variable"""
    if has_request_context() and hasattr(g, 'correlation_id'):
        return g.correlation_id
    return correlation_id_context.get() or 'unknown'


class CorrelationIdFilter(logging.Filter):
    """Stamp log records with the correlation ID so formatters can use it"""

    def filter(self, record):
        record.correlation_id = get_correlation_id()
        return True


def init_correlation_id_logging(app):
    """
    Initialize correlation ID logging configuration
    """
    formatter = logging.Formatter(
        '%(asctime)s [%(correlation_id)s] %(levelname)s in %(module)s: %(message)s'
    )
    for handler in app.logger.handlers:
        handler.addFilter(CorrelationIdFilter())
        handler.setFormatter(formatter)
