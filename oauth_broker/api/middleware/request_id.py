"""
Request ID middleware.

Takes the caller's X-Request-ID or mints one, and makes it visible to
every log record written while the request is served. The id is echoed
on all responses, relay pages and redirects included.
"""

from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from oauth_broker.core.logging import current_request_id

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Bind a request id to request.state and the logging context."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER, "")
        if not request_id or len(request_id) > MAX_REQUEST_ID_LENGTH:
            request_id = uuid4().hex
        request.state.request_id = request_id

        context_token = current_request_id.set(request_id)
        try:
            response = await call_next(request)
        finally:
            current_request_id.reset(context_token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
