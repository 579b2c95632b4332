# searchguard/middleware/security_headers.py
# Security headers middleware (helmet-equivalent defaults).
# - Content-Security-Policy from settings (CSP_VALUE).
# - X-Frame-Options and X-Content-Type-Options always on when installed.
# - Referrer-Policy / Permissions-Policy from settings.
# - Never overrides a header already set upstream.

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request as StarletteRequest
from starlette.responses import Response as StarletteResponse
from starlette.types import ASGIApp

from searchguard.config import Settings


class _SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        *,
        csp: Optional[str],
        referrer_policy: Optional[str],
        permissions_policy: Optional[str],
    ) -> None:
        super().__init__(app)
        self._csp = csp
        self._referrer = referrer_policy
        self._perm = permissions_policy

    async def dispatch(
        self, request: StarletteRequest, call_next: RequestResponseEndpoint
    ) -> StarletteResponse:
        resp: StarletteResponse = await call_next(request)
        apply_security_headers(
            resp,
            csp=self._csp,
            referrer_policy=self._referrer,
            permissions_policy=self._perm,
        )
        return resp


def apply_security_headers(
    resp: StarletteResponse,
    *,
    csp: Optional[str],
    referrer_policy: Optional[str],
    permissions_policy: Optional[str] = None,
) -> None:
    resp.headers.setdefault("X-Frame-Options", "DENY")
    resp.headers.setdefault("X-Content-Type-Options", "nosniff")
    if csp:
        resp.headers.setdefault("Content-Security-Policy", csp)
    if referrer_policy:
        resp.headers.setdefault("Referrer-Policy", referrer_policy)
    if permissions_policy:
        resp.headers.setdefault("Permissions-Policy", permissions_policy)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    s = value.strip()
    return s or None


def install_security_headers(app: FastAPI, settings: Settings) -> bool:
    """
    Install the security-headers middleware unless SEC_HEADERS_ENABLED is off.
    Returns whether it was installed.
    """
    if not settings.SEC_HEADERS_ENABLED:
        return False

    app.add_middleware(
        _SecurityHeadersMiddleware,
        csp=_clean(settings.CSP_VALUE),
        referrer_policy=_clean(settings.SEC_HEADERS_REFERRER_POLICY),
        permissions_policy=_clean(settings.SEC_HEADERS_PERMISSIONS_POLICY),
    )
    return True
