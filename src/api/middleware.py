"""
Request tracing middleware.

Every request gets an ID (taken from X-Request-ID or generated), which is
echoed back on the response and available to error handlers via
get_request_id(). Log lines carry the caller identity forwarded by the
gateway, so template activity can be traced per staff member, and every
response reports its server-side duration in X-Response-Time-Ms.
"""

import logging
import time
from contextvars import ContextVar
from typing import Optional
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
RESPONSE_TIME_HEADER = "X-Response-Time-Ms"
CALLER_HEADER = "X-User-Id"

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> Optional[str]:
    """Get the current request ID from context."""
    return request_id_var.get()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns a request ID and logs each request with its caller and timing."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        token = request_id_var.set(request_id)
        request.state.request_id = request_id

        log_extra = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "caller": request.headers.get(CALLER_HEADER) or "anonymous",
        }
        start_time = time.perf_counter()
        logger.info(
            "Request started",
            extra={
                **log_extra,
                "client_ip": request.client.host if request.client else "unknown",
            },
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={**log_extra, "error": str(e), "duration_ms": _elapsed_ms(start_time)},
            )
            raise
        finally:
            request_id_var.reset(token)

        duration_ms = _elapsed_ms(start_time)
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[RESPONSE_TIME_HEADER] = str(duration_ms)

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            "Request completed",
            extra={**log_extra, "status_code": response.status_code, "duration_ms": duration_ms},
        )
        return response


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)
