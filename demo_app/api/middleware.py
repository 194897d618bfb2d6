"""Request logging middleware."""

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status code and duration of every request.

    Errors without a dedicated handler escape ``call_next`` and are turned
    into a 500 by the outermost server error middleware; they are logged
    here as a 500 before being re-raised.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "%s %s -> %d (%.1f ms)",
                request.method,
                request.url.path,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                (time.perf_counter() - start_time) * 1000,
            )
            raise
        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response
