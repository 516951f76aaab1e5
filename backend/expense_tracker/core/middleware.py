"""HTTP request logging."""

import time

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()

# Probe endpoints hit every few seconds; only logged at debug level
QUIET_PATHS = frozenset({"/health", "/ready"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One structured log line per request, with status and timing."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        path = request.url.path

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request_failed",
                method=request.method,
                path=path,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            raise

        fields = {
            "method": request.method,
            "path": path,
            "status": response.status_code,
            "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
            "client": request.client.host if request.client else None,
        }
        if path in QUIET_PATHS:
            logger.debug("request", **fields)
        elif response.status_code >= 500:
            logger.warning("request", **fields)
        else:
            logger.info("request", **fields)
        return response
