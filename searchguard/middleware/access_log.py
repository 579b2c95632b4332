from __future__ import annotations

import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from searchguard.observability.metrics import inc_http_request

logger = logging.getLogger("access")


def request_id_from_request(request: Request) -> str:
    rid = getattr(request.state, "request_id", None)
    if rid is None:
        rid = request.scope.get("request_id")
    if rid is None:
        rid = request.headers.get("X-Request-ID")
    return str(rid) if rid else ""


class AccessLogMiddleware(BaseHTTPMiddleware):
    """One structured access line per request on the ``access`` logger."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        dur_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "request",
            extra={
                "event": "request",
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round(dur_ms, 2),
                "request_id": request_id_from_request(request),
            },
        )
        inc_http_request(request.method, response.status_code)
        return response
