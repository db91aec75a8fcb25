"""Request logging middleware."""

import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable, Optional

from tinylink.common.logging_config import get_logger


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request: method, path, client, status and duration.

    Server errors log at WARNING; requests that raise log at ERROR and re-raise.
    """

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or get_logger("web")

    @staticmethod
    def _client_address(request: Request) -> str:
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    async def dispatch(self, request: Request, call_next: Callable):
        started = time.perf_counter()
        summary = f"{request.method} {request.url.path} from {self._client_address(request)}"

        try:
            response = await call_next(request)
        except Exception:
            self.logger.exception(f"{summary} - unhandled error")
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        self.logger.log(
            level,
            f"{summary} - Status: {response.status_code} - Duration: {duration_ms:.2f}ms",
        )

        return response
