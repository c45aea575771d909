import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request: method, path, status, duration and session user."""

    async def dispatch(self, request: Request, call_next):
        start = time.monotonic()

        response = await call_next(request)

        duration = time.monotonic() - start
        username = None
        if "session" in request.scope:
            username = request.session.get("username")

        logger.info(
            "%s %s -> %s (%.2fs) user=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration,
            username or "-",
        )

        return response
