"""Global HTML error pages with stable error codes and request correlation."""

from __future__ import annotations

import logging
from uuid import uuid4

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import HTMLResponse

from searchguard.middleware.request_id import REQUEST_ID_HEADER, get_request_id
from searchguard.middleware.security_headers import apply_security_headers
from searchguard.services.responses import render_error

log = logging.getLogger(__name__)

# Map common HTTP statuses to stable machine-readable codes
_STATUS_TO_CODE = {
    401: "unauthorized",
    404: "not_found",
    405: "method_not_allowed",
}

_STATUS_TO_PAGE = {
    404: ("Page Not Found", "The page you're looking for doesn't exist."),
    405: ("Method Not Allowed", "This page does not accept that kind of request."),
}

_SERVER_ERROR_PAGE = ("Server Error", "An unexpected error occurred. Please try again.")


def _rid_from_request(request: Request) -> str:
    """Best-effort request id:
    1) id stored on the scope by RequestIDMiddleware
    2) context var (still set while inside the middleware)
    3) inbound header from client
    4) new UUID4
    """
    rid = request.scope.get("request_id") or get_request_id()
    if not rid:
        rid = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    return rid or str(uuid4())


def _html_error(
    request: Request,
    *,
    status: int,
    title: str,
    message: str,
    code: str,
    rid: str | None = None,
) -> HTMLResponse:
    rid = rid or _rid_from_request(request)
    resp = render_error(
        request,
        status_code=status,
        title=title,
        message=message,
        code=code,
        request_id=rid,
    )
    resp.headers[REQUEST_ID_HEADER] = rid
    resp.headers["X-Error-Code"] = code
    # 500s are rendered outside the middleware stack; headers are added here.
    settings = getattr(request.app.state, "settings", None)
    if settings is not None and settings.SEC_HEADERS_ENABLED:
        apply_security_headers(
            resp,
            csp=settings.CSP_VALUE,
            referrer_policy=settings.SEC_HEADERS_REFERRER_POLICY,
            permissions_policy=settings.SEC_HEADERS_PERMISSIONS_POLICY,
        )
    return resp


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exc_handler(request: Request, exc: StarletteHTTPException) -> HTMLResponse:
        code = _STATUS_TO_CODE.get(exc.status_code, "error")
        title, message = _STATUS_TO_PAGE.get(
            exc.status_code,
            ("Request Error", exc.detail if isinstance(exc.detail, str) else "HTTP error"),
        )
        return _html_error(request, status=exc.status_code, title=title, message=message, code=code)

    @app.exception_handler(Exception)
    async def unhandled_exc_handler(request: Request, exc: Exception) -> HTMLResponse:
        # Do not leak internals; the log line carries the details and request id.
        rid = _rid_from_request(request)
        log.error(
            "unhandled error",
            exc_info=(type(exc), exc, exc.__traceback__),
            extra={"path": request.url.path, "request_id": rid},
        )
        title, message = _SERVER_ERROR_PAGE
        return _html_error(
            request, status=500, title=title, message=message, code="internal_error", rid=rid
        )
