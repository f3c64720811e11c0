"""
Logging middleware.

Provides request/response logging and timing. Only the path is logged;
the query string carries authorization codes and CSRF state.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log all HTTP requests and responses.

    Logs:
    - Request method, path, client IP
    - Response status code
    - Request duration
    """

    async def dispatch(self, request: Request, call_next):
        """Process request and log details."""
        start_time = time.time()

        logger.info(
            f"Request: {request.method} {request.url.path} "
            f"from {request.client.host if request.client else 'unknown'}"
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"Error processing request: {request.method} {request.url.path} "
                f"({duration_ms:.2f}ms): {e}",
                exc_info=True,
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            f"Response: {response.status_code} "
            f"({duration_ms:.2f}ms) "
            f"for {request.method} {request.url.path}"
        )

        response.headers["X-Process-Time"] = f"{duration_ms:.2f}ms"
        return response
