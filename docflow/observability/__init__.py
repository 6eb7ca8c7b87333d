"""
Observability: logging configuration, correlation IDs and HTTP middleware.
"""

from docflow.observability.logger import configure_logging
from docflow.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

__all__ = [
    "configure_logging",
    "CorrelationMiddleware",
    "RequestLoggingMiddleware",
]
